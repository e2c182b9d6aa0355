"""Document scan pixel engine and task service."""

__version__ = "0.1.0"
