"""Per-entity repositories: a narrow find/create/update/delete/exists interface over the ORM."""

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookstore.core.errors import PersistenceError
from bookstore.models import Author, Book

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Author, Book)


class Repository(Generic[ModelT]):
    """
    Thin wrapper over one mapped class.

    Writes commit immediately and report success as "at least one row
    affected". ORM errors roll the session back and raise PersistenceError
    chained to the original exception.
    """

    model: type[ModelT]

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_all(self) -> list[ModelT]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def find_by_id(self, entity_id: int) -> ModelT | None:
        return self.db.query(self.model).filter(self.model.id == entity_id).first()

    def exists(self, entity_id: int) -> bool:
        return (
            self.db.query(self.model.id).filter(self.model.id == entity_id).first()
            is not None
        )

    def create(self, entity: ModelT) -> bool:
        self.db.add(entity)
        return self._save(f"create {self.model.__name__}")

    def update(self, entity_id: int, changes: dict[str, Any]) -> bool:
        try:
            affected = (
                self.db.query(self.model)
                .filter(self.model.id == entity_id)
                .update(changes, synchronize_session="fetch")
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to update {self.model.__name__} {entity_id}.") from e
        if affected == 0:
            self.db.rollback()
            return False
        return self._save(f"update {self.model.__name__}", changed=affected)

    def delete(self, entity: ModelT) -> bool:
        self.db.delete(entity)
        return self._save(f"delete {self.model.__name__}")

    def _save(self, action: str, changed: int | None = None) -> bool:
        if changed is None:
            changed = len(self.db.new) + len(self.db.dirty) + len(self.db.deleted)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to {action}.") from e
        logger.debug("Committed %s (%d rows)", action, changed)
        return changed > 0


class AuthorRepository(Repository[Author]):
    model = Author


class BookRepository(Repository[Book]):
    model = Book

    def get_image_file_name(self, book_id: int) -> str | None:
        """Return the image file name currently stored for a book."""
        row = self.db.query(Book.image).filter(Book.id == book_id).first()
        return row[0] if row else None
