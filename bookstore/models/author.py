"""ORM model for catalog authors."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from bookstore.models.base import Base


class Author(Base):
    """Author of zero or more books."""

    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    firstname = Column(String(255), nullable=False)
    lastname = Column(String(255), nullable=False)
    bio = Column(Text, nullable=True)

    books = relationship("Book", back_populates="author")
