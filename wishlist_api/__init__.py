"""Backend for the family Christmas wish list application."""

__version__ = "1.0.0"
