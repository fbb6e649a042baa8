"""Reading progress synchronization server."""

__version__ = "0.1.0"
