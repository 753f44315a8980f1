"""Security headers for JSON API responses."""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

# Responses are JSON only: nothing may be framed, sniffed or cached
API_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Cache-Control": "no-store",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response without overriding route-set values."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        for name, value in API_SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)

        if request.headers.get("x-forwarded-proto") == "https" or request.url.scheme == "https":
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000")

        return response
