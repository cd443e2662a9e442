"""Pydantic request/response schemas."""

from bookstore.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from bookstore.schemas.author import AuthorCreate, AuthorRead, AuthorUpdate
from bookstore.schemas.book import BookCreate, BookRead, BookUpdate
from bookstore.schemas.health import HealthResponse

__all__ = [
    "AuthorCreate",
    "AuthorRead",
    "AuthorUpdate",
    "BookCreate",
    "BookRead",
    "BookUpdate",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "RegisterResponse",
    "TokenResponse",
]
