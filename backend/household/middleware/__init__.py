"""Access control and response middleware for the household API."""

from household.middleware.access_control import (
    extract_bearer_token,
    get_current_identity,
    get_token_service,
    require_roles,
)
from household.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "extract_bearer_token",
    "get_current_identity",
    "get_token_service",
    "require_roles",
    "SecurityHeadersMiddleware",
]
