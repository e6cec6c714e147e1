"""
Bookshelf Backend — Book Record Manager
========================================

What:  Create/read/update/delete logic and invariants for Book records.
Who:   Called by the /books route handlers.

Invariants:
    - ISBN is unique across all books (checked on create, and on update
      against every other book).
    - A book always references an existing author. A missing author is an
      InvalidReferenceError (client input problem), not a ConflictError.

Ordering on create:
    author lookup → ISBN lookup → insert. Nothing is written if either
    check fails.

Concurrency:
    The ISBN check is a read followed by a write. The books table carries a
    unique constraint on isbn, so a concurrent writer that slips past the
    read fails at flush; that IntegrityError is reported as the same
    ConflictError. The author check is read-then-write too: if the author
    row disappears before the flush, the foreign key violation is reported
    as the same InvalidReferenceError the lookup raises.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookshelf.exceptions import ConflictError, InvalidReferenceError
from bookshelf.models import Author, Book
from bookshelf.schemas.book import BookCreate, BookUpdate
from bookshelf.services.pagination import Page, contains, fetch_page

logger = logging.getLogger(__name__)


class BookService:
    """
    Business logic layer for book records.

    Stateless: every method receives the request's session.
    """

    async def create(self, db: AsyncSession, data: BookCreate) -> Book:
        """
        Persist a new book bound to an existing author.

        Raises:
            InvalidReferenceError: data.author_id matches no author
            ConflictError: another book already has this ISBN
        """
        author = await self._resolve_author(db, data.author_id)

        if await self._find_by_isbn(db, data.isbn) is not None:
            logger.warning("Rejected duplicate ISBN %s", data.isbn)
            raise ConflictError(
                message="ISBN already exists", context={"isbn": data.isbn}
            )

        book = Book(**data.model_dump(exclude={"author_id"}), author=author)
        db.add(book)
        await self._flush(db, data.isbn, author.id)
        logger.info("Book created: %s (author %s)", book.id, author.id)
        return book

    async def find_all(
        self,
        db: AsyncSession,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        author_id: Optional[int] = None,
    ) -> Page[Book]:
        """
        Paginated book listing, each entry with its author.

        `search` matches title OR isbn. `author_id` narrows to one author and
        is ANDed onto every search branch:
            (title ~ search AND author = id) OR (isbn ~ search AND author = id)
        """
        narrowing = []
        if author_id is not None:
            narrowing.append(Book.author_id == author_id)

        where = None
        if search:
            branches = [contains(Book.title, search), contains(Book.isbn, search)]
            where = or_(*(and_(branch, *narrowing) for branch in branches))
        elif narrowing:
            where = and_(*narrowing)

        return await fetch_page(
            db,
            Book,
            where=where,
            options=[selectinload(Book.author)],
            page=page,
            limit=limit,
        )

    async def find_one(self, db: AsyncSession, book_id: int) -> Optional[Book]:
        """Fetch a book with its author, or None."""
        result = await db.execute(
            select(Book)
            .where(Book.id == book_id)
            .options(selectinload(Book.author))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update(
        self, db: AsyncSession, book_id: int, changes: BookUpdate
    ) -> Optional[Book]:
        """
        Overlay the fields present in `changes` onto the stored book.

        Raises:
            InvalidReferenceError: changes.author_id matches no author
            ConflictError: changes.isbn belongs to a different book
        """
        book = await self.find_one(db, book_id)
        if book is None:
            return None

        fields = changes.model_dump(exclude_unset=True)

        if "author_id" in fields:
            book.author = await self._resolve_author(db, fields.pop("author_id"))

        if "isbn" in fields:
            holder = await self._find_by_isbn(db, fields["isbn"])
            if holder is not None and holder.id != book.id:
                logger.warning(
                    "Rejected ISBN %s for book %s: held by book %s",
                    fields["isbn"], book.id, holder.id,
                )
                raise ConflictError(
                    message="ISBN already exists", context={"isbn": fields["isbn"]}
                )

        for field, value in fields.items():
            setattr(book, field, value)
        book.updated_at = datetime.now(timezone.utc)

        await self._flush(db, book.isbn, book.author.id)
        logger.info("Book updated: %s", book.id)
        return book

    async def remove(self, db: AsyncSession, book_id: int) -> bool:
        """Delete a book. Nothing references books, so there is no guard."""
        book = await self.find_one(db, book_id)
        if book is None:
            return False

        await db.delete(book)
        await db.flush()
        logger.info("Book deleted: %s", book_id)
        return True

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _resolve_author(self, db: AsyncSession, author_id: int) -> Author:
        author = await db.get(Author, author_id)
        if author is None:
            logger.warning("Rejected reference to missing author %s", author_id)
            raise InvalidReferenceError(
                message="Author does not exist",
                field="authorId",
                context={"author_id": author_id},
            )
        return author

    async def _find_by_isbn(self, db: AsyncSession, isbn: str) -> Optional[Book]:
        result = await db.execute(select(Book).where(Book.isbn == isbn))
        return result.scalars().first()

    async def _flush(self, db: AsyncSession, isbn: str, author_id: int) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            detail = str(e.orig)
            if "uq_books_isbn" in detail or "books.isbn" in detail:
                logger.warning("ISBN %s lost a concurrent insert race: %s", isbn, detail)
                raise ConflictError(
                    message="ISBN already exists", context={"isbn": isbn}
                ) from e
            if "foreign key" in detail.lower():
                logger.warning("Author %s vanished before flush: %s", author_id, detail)
                raise InvalidReferenceError(
                    message="Author does not exist",
                    field="authorId",
                    context={"author_id": author_id},
                ) from e
            raise


# ── Singleton Instance ────────────────────────────────────────────────────
book_service = BookService()
