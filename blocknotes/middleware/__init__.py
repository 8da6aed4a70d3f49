"""
BlockNotes — Middleware Package
=================================

Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Rate Limit: reject abusive clients before any work is done
    2. Request ID: correlation id for logs and error bodies
    3. Logging: one access line per request, tagged with the request id
"""
