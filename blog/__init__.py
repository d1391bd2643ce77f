"""Blog backend with session-based authentication."""

__version__ = "0.1.0"
