"""Book CRUD endpoints, including the cover image stored beside each book."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from bookstore.api.deps import get_asset_store, get_current_user
from bookstore.core.database import get_db
from bookstore.core.errors import NotFoundError, PersistenceError, ValidationError
from bookstore.models import Book
from bookstore.schemas.auth import CurrentUser
from bookstore.schemas.book import BookCreate, BookRead, BookUpdate
from bookstore.services.assets import AssetStore
from bookstore.services.repositories import BookRepository

logger = logging.getLogger(__name__)
router = APIRouter()


def get_book_repository(db: Annotated[Session, Depends(get_db)]) -> BookRepository:
    return BookRepository(db)


Repo = Annotated[BookRepository, Depends(get_book_repository)]
Assets = Annotated[AssetStore, Depends(get_asset_store)]
Caller = Annotated[CurrentUser | None, Depends(get_current_user)]


def _to_read(book: Book, assets: AssetStore) -> BookRead:
    """Serialize a book, embedding its cover image when the file exists."""
    read = BookRead.model_validate(book)
    return read.model_copy(update={"file": assets.load_base64(book.image)})


def _not_found(location: str, book_id: int) -> NotFoundError:
    message = f"{location}: Id: {book_id} was not found."
    logger.warning(message)
    return NotFoundError(message)


@router.get("", response_model=list[BookRead])
def list_books(repo: Repo, assets: Assets) -> list[BookRead]:
    location = "Books - GetBooks"
    logger.info("%s: Attempted call.", location)
    books = [_to_read(book, assets) for book in repo.find_all()]
    logger.info("%s: Successful (%d books).", location, len(books))
    return books


@router.get("/{book_id}", response_model=BookRead)
def get_book(book_id: int, repo: Repo, assets: Assets) -> BookRead:
    location = "Books - GetBook"
    logger.info("%s: Attempted call for id: %s", location, book_id)
    if not repo.exists(book_id):
        raise _not_found(location, book_id)
    book = repo.find_by_id(book_id)
    response = _to_read(book, assets)
    logger.info("%s: Successfully got %s", location, response.title)
    return response


@router.post("", response_model=BookRead, status_code=201)
def create_book(body: BookCreate, repo: Repo, assets: Assets, user: Caller) -> BookRead:
    """
    Create a book. When `file` is sent, its decoded bytes are written under
    `image` after the row is committed.
    """
    location = "Books - Create"
    logger.info("%s: Submission attempted by %s.", location, user.email if user else "anonymous")
    book = Book(**body.record_fields())
    if not repo.create(book):
        raise PersistenceError(f"{location}: Creation failed.")
    if body.file:
        assets.store(body.image, body.file)
    logger.info("%s: Created book id: %s", location, book.id)
    return _to_read(book, assets)


@router.put("/{book_id}", status_code=204)
def update_book(
    book_id: int,
    body: BookUpdate,
    repo: Repo,
    assets: Assets,
    user: Caller,
) -> Response:
    """
    Update a book, then reconcile its cover image with the new `image`/`file`.

    The row is committed before any file is touched; if the file step fails the
    row keeps its new values.
    """
    location = "Books - Update"
    logger.info(
        "%s: Update attempted for id: %s by %s",
        location,
        book_id,
        user.email if user else "anonymous",
    )
    if book_id < 1 or book_id != body.id:
        logger.info("%s: Update failed with bad data.", location)
        raise ValidationError(f"{location}: Id in path and body must match and be positive.")
    if not repo.exists(book_id):
        raise _not_found(location, book_id)

    old_image = repo.get_image_file_name(book_id)
    if not repo.update(book_id, body.record_fields()):
        raise PersistenceError(f"{location}: Update failed.")
    assets.reconcile(old_image, body.image, body.file)

    logger.info("%s: Id: %s successfully updated.", location, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{book_id}", status_code=204)
def delete_book(book_id: int, repo: Repo, user: Caller) -> Response:
    location = "Books - Delete"
    logger.info(
        "%s: Delete attempted for id: %s by %s",
        location,
        book_id,
        user.email if user else "anonymous",
    )
    if book_id < 1:
        logger.warning("%s: Delete failed with bad data", location)
        raise ValidationError(f"{location}: Id must be positive.")
    if not repo.exists(book_id):
        raise _not_found(location, book_id)
    book = repo.find_by_id(book_id)
    if not repo.delete(book):
        raise PersistenceError(f"{location}: Delete failed.")
    logger.info("%s: Id: %s successfully deleted.", location, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
