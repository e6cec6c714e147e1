from bookshelf.schemas.author import (
    AuthorBook,
    AuthorCreate,
    AuthorDetailResponse,
    AuthorResponse,
    AuthorUpdate,
)
from bookshelf.schemas.book import BookCreate, BookResponse, BookUpdate
from bookshelf.schemas.common import (
    ErrorResponse,
    HealthResponse,
    PaginatedResponse,
    is_valid_isbn,
)

__all__ = [
    "AuthorBook",
    "AuthorCreate",
    "AuthorDetailResponse",
    "AuthorResponse",
    "AuthorUpdate",
    "BookCreate",
    "BookResponse",
    "BookUpdate",
    "ErrorResponse",
    "HealthResponse",
    "PaginatedResponse",
    "is_valid_isbn",
]
