"""ORM model for catalog books."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from bookstore.models.base import Base


class Book(Base):
    """
    Book record. image holds the file name of the cover in the upload
    directory, or None/empty when the book has no cover.
    """

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    year = Column(Integer, nullable=True)
    isbn = Column(String(32), nullable=False, unique=True)
    summary = Column(Text, nullable=True)
    image = Column(String(255), nullable=True)
    price = Column(Float, nullable=True)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=True, index=True)

    author = relationship("Author", back_populates="books")
