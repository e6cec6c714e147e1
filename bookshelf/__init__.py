"""
Bookshelf Backend — Application Package Initializer
===================================================

What: Marks the `bookshelf` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn bookshelf.main:app`), pytest and the
      routes/services below.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, 404 mapping
    ├─────────────────────────────────────┤
    │         Services (Record managers)  │  ← Uniqueness, references, delete guard
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Services never raise "not found"; they return None/False and the routes
    turn absence into a 404.
"""

__version__ = "1.0.0"
