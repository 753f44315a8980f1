"""Access control dependencies: bearer authentication gate and role gate.

Every protected route depends on ``get_current_identity``. Routes limited to
certain roles add ``require_roles(...)``, which reads the identity the
authentication gate stored on ``request.state``.

Status codes:
- missing token -> 401
- revoked token -> 401
- invalid signature/payload or expired -> 403
- role not allowed -> 403
"""

import logging
from collections.abc import Awaitable, Callable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from household.core import get_db
from household.models.user import UserRole
from household.services.auth import (
    Identity,
    InvalidTokenError,
    MissingTokenError,
    RevokedTokenError,
    TokenExpiredError,
    TokenService,
)

logger = logging.getLogger(__name__)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def extract_bearer_token(request: Request) -> str | None:
    """Extract the token from ``Authorization: Bearer <token>``."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def get_token_service(db: AsyncSession = Depends(get_db)) -> TokenService:
    """Dependency to get token service."""
    return TokenService(db)


async def get_current_identity(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> Identity:
    """Authentication gate: verify the bearer token and attach its identity."""
    path = request.url.path
    try:
        identity = await token_service.verify(extract_bearer_token(request))
    except MissingTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers=_BEARER_CHALLENGE,
        ) from e
    except RevokedTokenError as e:
        logger.warning(f"Revoked token used for: {request.method} {path}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers=_BEARER_CHALLENGE,
        ) from e
    except TokenExpiredError as e:
        logger.debug(f"Expired token for: {request.method} {path}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Token has expired",
        ) from e
    except InvalidTokenError as e:
        logger.warning(f"Invalid token for: {request.method} {path} - {e}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        ) from e
    except SQLAlchemyError as e:
        logger.error(f"Token verification failed for: {request.method} {path} - {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication is temporarily unavailable",
        ) from e

    request.state.identity = identity
    return identity


def require_roles(*roles: UserRole) -> Callable[[Request], Awaitable[Identity]]:
    """Role gate: allow only identities whose role is in ``roles``.

    Must be declared after ``get_current_identity`` on the route (or depend
    on a route that does); a missing identity is rejected rather than assumed.
    """
    allowed = frozenset(roles)

    async def check_role(request: Request) -> Identity:
        identity: Identity | None = getattr(request.state, "identity", None)
        if identity is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unauthorized",
                headers=_BEARER_CHALLENGE,
            )
        if identity.role not in allowed:
            logger.warning(
                f"Role {identity.role} denied for: {request.method} {request.url.path}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden - Insufficient permissions",
            )
        return identity

    return check_role
