"""
Employee Directory API - Security Headers Middleware
=====================================================

What:  Adds the standard hardening headers to every response.
How:   Sets each header only when the route has not already set it.

Swagger UI at /api-docs loads its assets from a CDN, so no
Content-Security-Policy is sent.
"""

from typing import Dict, Mapping, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

DEFAULT_SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds hardening headers to every response without overriding route-set values."""

    def __init__(self, app, headers: Optional[Mapping[str, str]] = None, **kwargs):
        super().__init__(app, **kwargs)
        self.headers = dict(DEFAULT_SECURITY_HEADERS if headers is None else headers)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response
