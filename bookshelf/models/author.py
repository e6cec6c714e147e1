"""
Bookshelf Backend — Author ORM Model
=====================================

What:  SQLAlchemy model for the `authors` table.
Who:   Used by AuthorService for persistence and BookService for reference
       checks; serialized through AuthorResponse / AuthorDetailResponse.

Lifecycle:
    absent → present via AuthorService.create
    present → present via AuthorService.update (field overlay)
    present → absent via AuthorService.remove, refused while books exist

    Books are never cascaded: the relationship carries no delete cascade,
    the service refuses the delete instead.
"""

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base

if TYPE_CHECKING:
    from bookshelf.models.book import Book


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Author(Base):
    """
    A person who wrote one or more books.

    Name pairs (first_name, last_name) are unique at creation time only;
    the check lives in AuthorService.create, not in a table constraint,
    because updates are allowed to produce a duplicate pair.
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)

    bio: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)

    # ── Timestamps ────────────────────────────────────────────────────────
    # Python-side defaults so the values are on the instance right after
    # flush, without a refresh round-trip.
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

    # ── Relationships ─────────────────────────────────────────────────────
    books: Mapped[List["Book"]] = relationship(
        back_populates="author",
        order_by="Book.id",
    )

    def __repr__(self) -> str:
        return (
            f"<Author(id={self.id}, first_name='{self.first_name}', "
            f"last_name='{self.last_name}')>"
        )
