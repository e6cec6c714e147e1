"""
Bookshelf Backend — Pagination & Filter Helper
================================================

What:  Offset/limit pagination and substring filters shared by both record
       managers.
How:   One SELECT for the page (ORDER BY id, OFFSET, LIMIT) and one
       SELECT COUNT(*) over the same filter for the total.

Query plan:
    SELECT * FROM authors WHERE <filter> ORDER BY id LIMIT :take OFFSET :skip
    SELECT count(*) FROM authors WHERE <filter>

    skip = (page - 1) * limit, take = limit
"""

from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Sequence, Tuple, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from bookshelf.config import settings

T = TypeVar("T")

DEFAULT_PAGE = 1


@dataclass
class Page(Generic[T]):
    """One page of records plus the total count of every matching record."""
    data: List[T]
    total: int
    page: int
    limit: int


def resolve_page(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    """
    Apply defaults to page/limit and reject non-positive values.

    Raises:
        ValueError: page or limit was supplied and is not a positive integer
    """
    page = DEFAULT_PAGE if page is None else page
    limit = settings.default_page_size if limit is None else limit
    if page < 1:
        raise ValueError(f"page must be a positive integer, got {page}")
    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")
    return page, limit


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def contains(column: InstrumentedAttribute, text: str) -> ColumnElement[bool]:
    """
    Substring match on a text column (SQL LIKE '%text%').

    Wildcards typed by the user are matched literally. Case sensitivity is
    whatever the database's LIKE does by default.
    """
    return column.contains(text, autoescape=True)


async def fetch_page(
    db: AsyncSession,
    model: type,
    *,
    where: Optional[ColumnElement[bool]] = None,
    options: Sequence[Any] = (),
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Page:
    """
    Run a filtered, paginated scan over `model`.

    Args:
        db: Async database session
        model: Mapped class to scan
        where: Optional filter, shared by the page query and the count
        options: Loader options for the page query (e.g. selectinload)
        page: 1-based page number (default 1)
        limit: Page size (default settings.default_page_size)

    Returns:
        Page with at most `limit` records and the unpaginated total
    """
    page, limit = resolve_page(page, limit)

    query = select(model)
    count_query = select(func.count()).select_from(model)
    if where is not None:
        query = query.where(where)
        count_query = count_query.where(where)

    query = (
        query.options(*options)
        .order_by(model.id)
        .offset(offset_for(page, limit))
        .limit(limit)
    )

    result = await db.execute(query)
    data = list(result.scalars().all())

    count_result = await db.execute(count_query)
    total = count_result.scalar() or 0

    return Page(data=data, total=total, page=page, limit=limit)
