"""
Bookshelf Backend — Author Record Manager
==========================================

What:  Create/read/update/delete logic and invariants for Author records.
Who:   Called by the /authors route handlers; BookService reads authors
       directly through the session for its reference checks.

Invariants:
    - No two authors share (first_name, last_name) at creation time.
      Not re-checked on update.
    - An author with at least one book cannot be deleted; the delete is
      refused with ConflictError, never cascaded.

Absence:
    find_one / update return None and remove returns False when the id
    matches nothing. The routes turn that into a 404.

Concurrency:
    The name-pair check is a read followed by a separate write. Two
    concurrent creates of the same name can both pass the check; there is
    no table constraint behind it.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookshelf.exceptions import ConflictError
from bookshelf.models import Author
from bookshelf.schemas.author import AuthorCreate, AuthorUpdate
from bookshelf.services.pagination import Page, contains, fetch_page

logger = logging.getLogger(__name__)


class AuthorService:
    """
    Business logic layer for author records.

    Stateless: every method receives the request's session.
    """

    async def create(self, db: AsyncSession, data: AuthorCreate) -> Author:
        """
        Persist a new author.

        Raises:
            ConflictError: an author with the same first and last name exists
        """
        result = await db.execute(
            select(Author).where(
                Author.first_name == data.first_name,
                Author.last_name == data.last_name,
            )
        )
        if result.scalars().first() is not None:
            logger.warning(
                "Rejected duplicate author %s %s", data.first_name, data.last_name
            )
            raise ConflictError(
                message="Author with this name already exists",
                context={"first_name": data.first_name, "last_name": data.last_name},
            )

        author = Author(**data.model_dump())
        db.add(author)
        await db.flush()
        logger.info("Author created: %s", author.id)
        return author

    async def find_all(
        self,
        db: AsyncSession,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Page[Author]:
        """
        Paginated author listing.

        `search` matches authors whose first OR last name contains it.
        """
        where = None
        if search:
            where = or_(
                contains(Author.first_name, search),
                contains(Author.last_name, search),
            )
        return await fetch_page(db, Author, where=where, page=page, limit=limit)

    async def find_one(self, db: AsyncSession, author_id: int) -> Optional[Author]:
        """Fetch an author with its books, or None."""
        result = await db.execute(
            select(Author)
            .where(Author.id == author_id)
            .options(selectinload(Author.books))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update(
        self, db: AsyncSession, author_id: int, changes: AuthorUpdate
    ) -> Optional[Author]:
        """
        Overlay the fields present in `changes` onto the stored author.

        Fields not sent by the client are left untouched. updated_at is
        refreshed even when `changes` is empty.
        """
        author = await self.find_one(db, author_id)
        if author is None:
            return None

        for field, value in changes.model_dump(exclude_unset=True).items():
            setattr(author, field, value)
        author.updated_at = datetime.now(timezone.utc)

        await db.flush()
        logger.info("Author updated: %s", author.id)
        return author

    async def remove(self, db: AsyncSession, author_id: int) -> bool:
        """
        Delete an author that has no books.

        Returns:
            False if no author has this id, True once deleted

        Raises:
            ConflictError: the author still has books
        """
        author = await self.find_one(db, author_id)
        if author is None:
            return False

        if author.books:
            logger.warning(
                "Refused to delete author %s with %d books", author_id, len(author.books)
            )
            raise ConflictError(
                message="Cannot delete author with associated books",
                context={"author_id": author_id, "book_count": len(author.books)},
            )

        await db.delete(author)
        await db.flush()
        logger.info("Author deleted: %s", author_id)
        return True


# ── Singleton Instance ────────────────────────────────────────────────────
author_service = AuthorService()
