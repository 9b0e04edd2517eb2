"""pageserve - cached static page server."""

__version__ = "0.1.0"
