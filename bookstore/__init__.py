"""Bookstore catalog API: authors and books behind JWT authentication."""

__version__ = "0.1.0"
