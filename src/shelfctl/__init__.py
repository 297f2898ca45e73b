"""shelfctl — read-only study-notes shelf CLI."""

__version__ = "0.1.0"
