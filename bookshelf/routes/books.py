"""
Bookshelf Backend — Book Route Handlers
=========================================

What:  /books CRUD endpoints. Every response embeds the book's author.

Endpoints:
    POST   /books             → 201 BookResponse
    GET    /books             → 200 PaginatedResponse[BookResponse]
    GET    /books/{id}        → 200 BookResponse
    PATCH  /books/{id}        → 200 BookResponse
    DELETE /books/{id}        → 204
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.config import settings
from bookshelf.database import get_db_session
from bookshelf.exceptions import NotFoundError
from bookshelf.schemas.book import BookCreate, BookResponse, BookUpdate
from bookshelf.schemas.common import ErrorResponse, PaginatedResponse
from bookshelf.services.book_service import book_service

router = APIRouter(prefix="/books", tags=["Books"])

_ERRORS = {
    400: {"description": "Author does not exist", "model": ErrorResponse},
    409: {"description": "ISBN already exists", "model": ErrorResponse},
}


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create a book for an existing author",
)
async def create_book(
    payload: BookCreate,
    db: AsyncSession = Depends(get_db_session),
) -> BookResponse:
    book = await book_service.create(db, payload)
    return BookResponse.model_validate(book)


@router.get(
    "",
    response_model=PaginatedResponse[BookResponse],
    summary="List books",
    description=(
        "Paginated book list. `search` matches title or ISBN; `authorId` "
        "restricts results to one author and combines with `search`."
    ),
)
async def list_books(
    response: Response,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.default_page_size, ge=1),
    search: Optional[str] = Query(default=None, description="Substring of title or ISBN"),
    author_id: Optional[int] = Query(default=None, alias="authorId"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[BookResponse]:
    result = await book_service.find_all(
        db, page=page, limit=limit, search=search, author_id=author_id
    )
    response.headers["X-Total-Count"] = str(result.total)
    return PaginatedResponse[BookResponse](
        data=[BookResponse.model_validate(book) for book in result.data],
        total=result.total,
        page=result.page,
        limit=result.limit,
    )


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={404: {"description": "Book not found", "model": ErrorResponse}},
    summary="Get a book with its author",
)
async def get_book(
    book_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> BookResponse:
    book = await book_service.find_one(db, book_id)
    if book is None:
        raise NotFoundError(resource="Book", resource_id=book_id)
    return BookResponse.model_validate(book)


@router.patch(
    "/{book_id}",
    response_model=BookResponse,
    responses={404: {"description": "Book not found", "model": ErrorResponse}, **_ERRORS},
    summary="Partially update a book",
)
async def update_book(
    book_id: int,
    payload: BookUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> BookResponse:
    book = await book_service.update(db, book_id, payload)
    if book is None:
        raise NotFoundError(resource="Book", resource_id=book_id)
    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Book not found", "model": ErrorResponse}},
    summary="Delete a book",
)
async def delete_book(
    book_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await book_service.remove(db, book_id):
        raise NotFoundError(resource="Book", resource_id=book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
