"""Web API for the sync server."""
