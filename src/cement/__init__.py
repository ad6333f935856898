"""cement — parlance stored in a database."""

__version__ = "1.0.0"
