"""A JSON REST service for comments, stored in SQLite and served with Flask."""

__version__ = "0.1.0"
__all__ = ["__version__"]