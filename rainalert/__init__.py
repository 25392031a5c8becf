"""Next-hour rain forecast checks with ntfy push notifications and SQLite history."""

__version__ = "1.0.0"

__all__ = ["__version__"]