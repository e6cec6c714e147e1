"""
Bookshelf Backend — Services Layer
=====================================

What:  Record managers sitting between routes (HTTP) and the database.

Service Inventory:
    - AuthorService: author lifecycle, name uniqueness, delete guard
    - BookService:   book lifecycle, ISBN uniqueness, author references
    - pagination:    shared offset/limit paging and substring filters
"""
