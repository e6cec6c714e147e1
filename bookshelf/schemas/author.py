"""
Bookshelf Backend — Author Request/Response Schemas
====================================================

What:  Pydantic models defining the /authors API contract.
How:   FastAPI validates request bodies against the *Create/*Update models
       and serializes responses through the *Response models (camelCase).
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field, field_validator

from bookshelf.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AuthorCreate(CamelModel):
    """Body of POST /authors."""
    first_name: str = Field(min_length=1, max_length=255, description="Given name")
    last_name: str = Field(min_length=1, max_length=255, description="Family name")
    bio: Optional[str] = Field(default=None, description="Free-form biography")
    birth_date: Optional[date] = Field(default=None, description="Birth date (YYYY-MM-DD)")


class AuthorUpdate(CamelModel):
    """
    Body of PATCH /authors/{id}.

    Only the keys present in the request are applied; omitted keys leave the
    stored value untouched. Name fields may be omitted but not nulled.
    """
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    bio: Optional[str] = None
    birth_date: Optional[date] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def reject_null_name(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("must not be null")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AuthorResponse(CamelModel):
    """Author without its books; used in lists and nested in BookResponse."""
    id: int
    first_name: str
    last_name: str
    bio: Optional[str] = None
    birth_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class AuthorBook(CamelModel):
    """Book entry nested inside AuthorDetailResponse (no back-reference)."""
    id: int
    title: str
    isbn: str
    published_date: Optional[date] = None
    genre: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AuthorDetailResponse(AuthorResponse):
    """Author with its books, returned by GET /authors/{id}."""
    books: List[AuthorBook] = Field(default_factory=list)
