"""
Bookshelf Backend — API Routes Package
=========================================

Route Inventory:
    - authors.py: /authors CRUD (list, get, create, patch, delete)
    - books.py:   /books CRUD (list with authorId filter, get, create, patch, delete)
    - health.py:  GET /health (service health check)

Routes stay thin: they parse input, call a service, and convert an absent
result into NotFoundError. Invariants live in the services.
"""
