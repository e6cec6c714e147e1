"""
Bookshelf Backend — Author Route Handlers
===========================================

What:  /authors CRUD endpoints.
How:   Parses path/query/body, delegates to AuthorService, and turns an
       absent result (None / False) into a 404.

Endpoints:
    POST   /authors           → 201 AuthorResponse
    GET    /authors           → 200 PaginatedResponse[AuthorResponse]
    GET    /authors/{id}      → 200 AuthorDetailResponse (with books)
    PATCH  /authors/{id}      → 200 AuthorResponse
    DELETE /authors/{id}      → 204
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.config import settings
from bookshelf.database import get_db_session
from bookshelf.exceptions import NotFoundError
from bookshelf.schemas.author import (
    AuthorCreate,
    AuthorDetailResponse,
    AuthorResponse,
    AuthorUpdate,
)
from bookshelf.schemas.common import ErrorResponse, PaginatedResponse
from bookshelf.services.author_service import author_service

router = APIRouter(prefix="/authors", tags=["Authors"])


@router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Author name already taken", "model": ErrorResponse}},
    summary="Create an author",
)
async def create_author(
    payload: AuthorCreate,
    db: AsyncSession = Depends(get_db_session),
) -> AuthorResponse:
    author = await author_service.create(db, payload)
    return AuthorResponse.model_validate(author)


@router.get(
    "",
    response_model=PaginatedResponse[AuthorResponse],
    summary="List authors",
    description="Paginated author list. `search` matches first or last name.",
)
async def list_authors(
    response: Response,
    page: int = Query(default=1, ge=1, description="1-based page number"),
    limit: int = Query(default=settings.default_page_size, ge=1, description="Items per page"),
    search: Optional[str] = Query(default=None, description="Substring of first or last name"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[AuthorResponse]:
    result = await author_service.find_all(db, page=page, limit=limit, search=search)
    response.headers["X-Total-Count"] = str(result.total)
    return PaginatedResponse[AuthorResponse](
        data=[AuthorResponse.model_validate(author) for author in result.data],
        total=result.total,
        page=result.page,
        limit=result.limit,
    )


@router.get(
    "/{author_id}",
    response_model=AuthorDetailResponse,
    responses={404: {"description": "Author not found", "model": ErrorResponse}},
    summary="Get an author with their books",
)
async def get_author(
    author_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> AuthorDetailResponse:
    author = await author_service.find_one(db, author_id)
    if author is None:
        raise NotFoundError(resource="Author", resource_id=author_id)
    return AuthorDetailResponse.model_validate(author)


@router.patch(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={404: {"description": "Author not found", "model": ErrorResponse}},
    summary="Partially update an author",
)
async def update_author(
    author_id: int,
    payload: AuthorUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> AuthorResponse:
    author = await author_service.update(db, author_id, payload)
    if author is None:
        raise NotFoundError(resource="Author", resource_id=author_id)
    return AuthorResponse.model_validate(author)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Author not found", "model": ErrorResponse},
        409: {"description": "Author still has books", "model": ErrorResponse},
    },
    summary="Delete an author without books",
)
async def delete_author(
    author_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await author_service.remove(db, author_id):
        raise NotFoundError(resource="Author", resource_id=author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
