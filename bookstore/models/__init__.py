"""SQLAlchemy ORM models."""

from bookstore.models.author import Author
from bookstore.models.base import Base
from bookstore.models.book import Book
from bookstore.models.user import Role, User, user_roles

__all__ = ["Author", "Base", "Book", "Role", "User", "user_roles"]
