"""Blacklisted JWT tokens - revoked on logout, purged after expiry."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from household.core.database import Base


class TokenBlacklist(Base):
    """A revoked bearer token.

    ``expires_at`` is the token's own ``exp`` claim, so a row can be
    deleted as soon as it passes: the token would fail expiry checks anyway.
    """

    __tablename__ = "token_blacklist"

    token: Mapped[str] = mapped_column(String(2048), primary_key=True)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
