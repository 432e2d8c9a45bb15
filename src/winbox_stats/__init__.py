"""Host resource sampling into monthly SQLite scopes, with PNG charts."""

__version__ = "0.3.0"
