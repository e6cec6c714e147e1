"""
Bookshelf Backend — Book Request/Response Schemas
==================================================

What:  Pydantic models defining the /books API contract.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from bookshelf.schemas.author import AuthorBook, AuthorResponse
from bookshelf.schemas.common import CamelModel, check_isbn


class BookCreate(CamelModel):
    """Body of POST /books. The author must already exist."""
    title: str = Field(min_length=1, max_length=255)
    isbn: str = Field(description="ISBN-10 or ISBN-13, hyphens allowed")
    author_id: int = Field(description="ID of an existing author")
    published_date: Optional[date] = None
    genre: Optional[str] = Field(default=None, max_length=100)

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str) -> str:
        return check_isbn(v)


class BookUpdate(CamelModel):
    """
    Body of PATCH /books/{id}.

    Supplying authorId moves the book to another (existing) author.
    """
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    isbn: Optional[str] = None
    author_id: Optional[int] = None
    published_date: Optional[date] = None
    genre: Optional[str] = Field(default=None, max_length=100)

    @field_validator("title", "author_id")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("must not be null")
        return check_isbn(v)


class BookResponse(AuthorBook):
    """Book with its author, returned by every /books endpoint."""
    author_id: int
    author: AuthorResponse
