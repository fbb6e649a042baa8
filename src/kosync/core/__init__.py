"""Core sync protocol: records, authentication and operations."""
