"""EventRadar: read API for event discovery."""

__version__ = "0.1.0"
