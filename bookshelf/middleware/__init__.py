"""
Bookshelf Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs before logging so every access log line carries the
    correlation id; logging sees the final status code on the way out.
"""
