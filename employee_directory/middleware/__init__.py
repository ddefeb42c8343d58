# Middleware package init
"""
Employee Directory API - Middleware Package
============================================

What:  Cross-cutting concerns applied to every request, plus the per-route
       request validation dependency (validate.py).

Middleware Chain (outermost first, as registered in main.create_app):
    Request → [Rate Limit Headers] → [Request ID] → [Access Log]
            → [Security Headers] → [CORS] → Route Handler

    - Rate limit headers are advisory; nothing is rejected.
    - Request ID runs before logging so access lines carry the id.
    - CORS is innermost so preflight answers still get the other headers.
"""
