"""
Happy Thoughts API - Middleware Package
=========================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the correlation ID.
    Authentication is not middleware: routes that need a user declare the
    require_user dependency (see happy_thoughts.dependencies).
"""
