"""API routes. Every route passes through the authorization gate first."""

from fastapi import APIRouter, Depends

from bookstore.api import authors, books, health, users
from bookstore.api.deps import enforce_route_policy

router = APIRouter(dependencies=[Depends(enforce_route_policy)])
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(authors.router, prefix="/authors", tags=["authors"])
router.include_router(books.router, prefix="/books", tags=["books"])
