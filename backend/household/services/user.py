"""User service - registration, login and profile management."""

import asyncio
import builtins
import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from household.models.user import User, UserRole
from household.services.auth import (
    InsufficientRoleError,
    InvalidCredentialsError,
    UserExistsError,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

# Verified against when the email is unknown so both paths cost one hash check
_DUMMY_HASH = hash_password("dummy-password")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Service for the credential store."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def list(self) -> builtins.list[User]:
        result = await self.session.execute(select(User).order_by(User.created_at, User.email))
        return list(result.scalars().all())

    async def admin_exists(self) -> bool:
        """Check if any admin user exists."""
        result = await self.session.execute(
            select(func.count(User.id)).where(User.role == UserRole.ADMIN)
        )
        return (result.scalar() or 0) > 0

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a new user.

        Self-registration as admin is only accepted while no admin exists.

        Raises:
            UserExistsError: If the email is taken
            InsufficientRoleError: If an admin already exists and role is admin
        """
        email = normalize_email(email)
        if await self.get_by_email(email) is not None:
            raise UserExistsError("User already exists")

        if role == UserRole.ADMIN and await self.admin_exists():
            raise InsufficientRoleError("Only an admin can create another admin")

        user = User(
            email=email,
            password_hash=await asyncio.to_thread(hash_password, password),
            name=name,
            role=role,
        )
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # Concurrent registration won the unique index
            await self.session.rollback()
            raise UserExistsError("User already exists") from e
        await self.session.refresh(user)

        logger.info(f"Registered user: {email} ({role})")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Authenticate a user and return the user object.

        Raises InvalidCredentialsError for both "user not found" and
        "wrong password" to prevent user enumeration.
        """
        user = await self.get_by_email(email)

        if user is None:
            await asyncio.to_thread(verify_password, password, _DUMMY_HASH)
            raise InvalidCredentialsError("Invalid credentials")

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            raise InvalidCredentialsError("Invalid credentials")

        return user

    async def update_profile(self, email: str, changes: dict[str, Any]) -> User | None:
        """Apply profile changes. A new password is re-hashed before storing."""
        user = await self.get_by_email(email)
        if user is None:
            return None

        password = changes.pop("password", None)
        if password:
            user.password_hash = await asyncio.to_thread(hash_password, password)
        for field, value in changes.items():
            setattr(user, field, value)

        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, email: str) -> bool:
        user = await self.get_by_email(email)
        if user is None:
            return False

        await self.session.delete(user)
        await self.session.flush()
        logger.info(f"Deleted user: {user.email}")
        return True
