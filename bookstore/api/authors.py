"""Author CRUD endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from bookstore.core.database import get_db
from bookstore.core.errors import NotFoundError, PersistenceError, ValidationError
from bookstore.models import Author
from bookstore.schemas.author import AuthorCreate, AuthorRead, AuthorUpdate
from bookstore.services.repositories import AuthorRepository

logger = logging.getLogger(__name__)
router = APIRouter()


def get_author_repository(db: Annotated[Session, Depends(get_db)]) -> AuthorRepository:
    return AuthorRepository(db)


Repo = Annotated[AuthorRepository, Depends(get_author_repository)]


def _not_found(location: str, author_id: int) -> NotFoundError:
    message = f"{location}: Id: {author_id} was not found."
    logger.warning(message)
    return NotFoundError(message)


@router.get("", response_model=list[AuthorRead])
def list_authors(repo: Repo) -> list[AuthorRead]:
    location = "Authors - GetAuthors"
    logger.info("%s: Attempted call.", location)
    authors = [AuthorRead.model_validate(a) for a in repo.find_all()]
    logger.info("%s: Successful (%d authors).", location, len(authors))
    return authors


@router.get("/{author_id}", response_model=AuthorRead)
def get_author(author_id: int, repo: Repo) -> AuthorRead:
    location = "Authors - GetAuthor"
    logger.info("%s: Attempted call for id: %s", location, author_id)
    author = repo.find_by_id(author_id)
    if author is None:
        raise _not_found(location, author_id)
    logger.info("%s: Successfully got %s %s", location, author.firstname, author.lastname)
    return AuthorRead.model_validate(author)


@router.post("", response_model=AuthorRead, status_code=201)
def create_author(body: AuthorCreate, repo: Repo) -> AuthorRead:
    location = "Authors - Create"
    logger.info("%s: Submission attempted.", location)
    author = Author(**body.model_dump())
    if not repo.create(author):
        raise PersistenceError(f"{location}: Creation failed.")
    logger.info("%s: Created author id: %s", location, author.id)
    return AuthorRead.model_validate(author)


@router.put("/{author_id}", status_code=204)
def update_author(author_id: int, body: AuthorUpdate, repo: Repo) -> Response:
    location = "Authors - Update"
    logger.info("%s: Update attempted for id: %s", location, author_id)
    if author_id < 1 or author_id != body.id:
        logger.info("%s: Update failed with bad data.", location)
        raise ValidationError(f"{location}: Id in path and body must match and be positive.")
    if not repo.exists(author_id):
        raise _not_found(location, author_id)
    if not repo.update(author_id, body.model_dump(exclude={"id"})):
        raise PersistenceError(f"{location}: Update failed.")
    logger.info("%s: Id: %s successfully updated.", location, author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{author_id}", status_code=204)
def delete_author(author_id: int, repo: Repo) -> Response:
    location = "Authors - Delete"
    logger.info("%s: Delete attempted for id: %s", location, author_id)
    if author_id < 1:
        logger.warning("%s: Delete failed with bad data", location)
        raise ValidationError(f"{location}: Id must be positive.")
    if not repo.exists(author_id):
        raise _not_found(location, author_id)
    author = repo.find_by_id(author_id)
    if not repo.delete(author):
        raise PersistenceError(f"{location}: Delete failed.")
    logger.info("%s: Id: %s successfully deleted.", location, author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
