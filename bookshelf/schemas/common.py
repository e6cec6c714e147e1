"""
Bookshelf Backend — Shared Schema Building Blocks
==================================================

What:  Base model configuration, pagination/error/health response models,
       and the ISBN validator used by the book schemas.

Wire format:
    Python attributes are snake_case; JSON keys are camelCase
    (first_name ↔ firstName). Both spellings are accepted on input.
"""

import re
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

_ISBN_SEPARATORS = re.compile(r"[\s-]")

# 13 digits plus the four separators of the hyphenated form
ISBN_MAX_LENGTH = 17


class CamelModel(BaseModel):
    """Base for every API schema: camelCase aliases, ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# ISBN Validation
# ══════════════════════════════════════════════════════════════════════════


def is_valid_isbn(value: str) -> bool:
    """
    Check an ISBN-10 or ISBN-13, ignoring hyphens and spaces.

    ISBN-10: weights 10..1, sum mod 11 == 0, last digit may be 'X' (=10).
    ISBN-13: weights alternate 1, 3, sum mod 10 == 0.
    """
    digits = _ISBN_SEPARATORS.sub("", value).upper()

    if len(digits) == 10:
        if not digits[:9].isdigit() or not (digits[9].isdigit() or digits[9] == "X"):
            return False
        total = 0
        for position, char in enumerate(digits):
            digit = 10 if char == "X" else int(char)
            total += (10 - position) * digit
        return total % 11 == 0

    if len(digits) == 13:
        if not digits.isdigit():
            return False
        total = sum(
            int(char) * (3 if position % 2 else 1)
            for position, char in enumerate(digits)
        )
        return total % 10 == 0

    return False


def check_isbn(value: str) -> str:
    """Field-validator body shared by BookCreate and BookUpdate."""
    value = value.strip()
    if len(value) > ISBN_MAX_LENGTH:
        raise ValueError(f"isbn must be at most {ISBN_MAX_LENGTH} characters")
    if not is_valid_isbn(value):
        raise ValueError("isbn must be a valid ISBN-10 or ISBN-13")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Response Wrappers
# ══════════════════════════════════════════════════════════════════════════


class PaginatedResponse(CamelModel, Generic[T]):
    """
    What:  Offset-paginated list wrapper returned by every list endpoint.

    `total` counts every record matching the filters, not just this page,
    so clients can compute the page count as ceil(total / limit).
    """
    data: List[T] = Field(description="Records on this page")
    total: int = Field(description="Total number of records matching the filters")
    page: int = Field(description="1-based page number")
    limit: int = Field(description="Maximum records per page")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "ISBN already exists",
            "details": {"isbn": "978-3-16-148410-0"},
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
