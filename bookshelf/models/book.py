"""
Bookshelf Backend — Book ORM Model
===================================

What:  SQLAlchemy model for the `books` table.
Who:   Used by BookService; serialized through BookResponse / BookSummary.

Constraints:
    - isbn is unique across all rows (uq_books_isbn). BookService checks it
      before writing and translates a constraint violation from a
      concurrent writer into the same ConflictError.
    - author_id is mandatory; every book references exactly one author.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base
from bookshelf.models.author import utcnow

if TYPE_CHECKING:
    from bookshelf.models.author import Author


class Book(Base):
    """A book written by exactly one author."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # Stored as submitted (hyphens preserved); validated by the schemas
    isbn: Mapped[str] = mapped_column(String(32), nullable=False)

    published_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped["Author"] = relationship(back_populates="books")

    __table_args__ = (
        UniqueConstraint("isbn", name="uq_books_isbn"),
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, isbn='{self.isbn}', author_id={self.author_id})>"
