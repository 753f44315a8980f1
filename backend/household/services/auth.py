"""Authentication core: password hashing, JWT issuance/verification and revocation."""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jwt.exceptions import PyJWTError
from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession

from household.core import settings
from household.models.token_blacklist import TokenBlacklist
from household.models.user import User, UserRole

logger = logging.getLogger(__name__)

# Dialects that can insert a blacklist row with ON CONFLICT DO NOTHING
_CONFLICT_IGNORING_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

# Argon2id: 3 passes over 64 MiB
ph = PasswordHasher(
    time_cost=3,
    memory_cost=65536,
    parallelism=4,
    hash_len=32,
    salt_len=16,
)


class AuthError(Exception):
    """Base authentication error."""

    pass


class InvalidCredentialsError(AuthError):
    """Invalid email or password."""

    pass


class UserExistsError(AuthError):
    """A user with this email is already registered."""

    pass


class InsufficientRoleError(AuthError):
    """Authenticated identity lacks a required role."""

    pass


class TokenError(AuthError):
    """JWT token error."""

    pass


class MissingTokenError(TokenError):
    """No bearer token was supplied."""

    pass


class RevokedTokenError(TokenError):
    """Token is on the blacklist."""

    pass


class InvalidTokenError(TokenError):
    """JWT token signature or payload is invalid."""

    pass


class TokenExpiredError(TokenError):
    """JWT token has expired."""

    pass


class NoExpiryClaimError(TokenError):
    """Token carries no ``exp`` claim and cannot be blacklisted."""

    pass


@dataclass(frozen=True)
class Identity:
    """Claims of a verified token, attached to the request."""

    subject_id: UUID
    role: UserRole
    email: str | None = None


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    if not password:
        raise ValueError("Password cannot be empty")
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash using constant-time comparison.

    Never raises: a mismatch or an unparseable hash both return False.
    """
    if not password or not password_hash:
        return False
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(
    subject_id: UUID,
    role: UserRole | str,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token.

    The lifetime is ``jwt_expire_hours`` unless ``expires_delta`` is given.
    """
    issued_at = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.jwt_expire_hours)
    payload: dict[str, Any] = {
        "id": str(subject_id),
        "email": email,
        "role": str(role),
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        # Two logins in the same second must not share a token string
        "jti": secrets.token_hex(16),
    }
    token = jwt.encode(
        payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return str(token)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token (signature and expiry)."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            leeway=settings.jwt_leeway_seconds,
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except PyJWTError as e:
        raise InvalidTokenError(f"Invalid token: {e}") from e


def read_unverified_claims(token: str) -> dict[str, Any]:
    """Read token claims without checking signature or expiry."""
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except PyJWTError as e:
        raise InvalidTokenError(f"Malformed token: {e}") from e


def identity_from_claims(payload: dict[str, Any]) -> Identity:
    """Build an Identity from decoded claims."""
    try:
        subject_id = UUID(str(payload["id"]))
        role = UserRole(payload["role"])
    except (KeyError, ValueError) as e:
        raise InvalidTokenError("Token is missing identity claims") from e
    return Identity(subject_id=subject_id, role=role, email=payload.get("email"))


class TokenService:
    """Issues, verifies and revokes bearer tokens against the blacklist."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def issue(self, subject_id: UUID, role: UserRole | str, email: str | None = None) -> str:
        """Issue a token valid for the configured lifetime."""
        return create_access_token(subject_id, role, email)

    async def is_revoked(self, token: str) -> bool:
        """Check if a token has been revoked."""
        result = await self.session.execute(
            select(TokenBlacklist.token).where(TokenBlacklist.token == token)
        )
        return result.scalar_one_or_none() is not None

    async def verify(self, token: str | None) -> Identity:
        """Verify a token and return its identity.

        The blacklist lookup runs before signature and expiry checks so a
        revoked token is rejected even while it is cryptographically valid.
        """
        if not token:
            raise MissingTokenError("No token provided")

        if await self.is_revoked(token):
            raise RevokedTokenError("Token has been invalidated")

        identity = identity_from_claims(decode_token(token))

        if settings.verify_token_subject:
            result = await self.session.execute(
                select(User.id).where(User.id == identity.subject_id)
            )
            if result.scalar_one_or_none() is None:
                logger.info(f"Rejected token for deleted user {identity.subject_id}")
                raise InvalidTokenError("Token subject no longer exists")

        return identity

    async def revoke(self, token: str) -> datetime:
        """Blacklist a token until its own expiry. Returns that expiry.

        Claims are read without verification; callers only revoke the token
        that authenticated the current request.
        """
        exp = read_unverified_claims(token).get("exp")
        if exp is None:
            raise NoExpiryClaimError("Token has no expiration")

        expires_at = datetime.fromtimestamp(exp, tz=UTC)
        insert = _CONFLICT_IGNORING_INSERTS.get(self.session.get_bind().dialect.name)
        if insert is not None:
            # A concurrent logout of the same token leaves the existing row in place
            await self.session.execute(
                insert(TokenBlacklist)
                .values(token=token, expires_at=expires_at)
                .on_conflict_do_nothing(index_elements=[TokenBlacklist.token])
            )
        elif not await self.is_revoked(token):
            self.session.add(TokenBlacklist(token=token, expires_at=expires_at))
            await self.session.flush()
        logger.debug(f"Token blacklisted until {expires_at.isoformat()}")
        return expires_at

    async def sweep(self, now: datetime | None = None) -> int:
        """Remove blacklist entries whose expiry has passed. Returns count removed."""
        if now is None:
            now = datetime.now(UTC)
        result: CursorResult[Any] = await self.session.execute(  # type: ignore[assignment]
            delete(TokenBlacklist).where(TokenBlacklist.expires_at < now)
        )
        return result.rowcount
