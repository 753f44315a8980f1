"""Blacklist sweeper - periodically purges expired token blacklist entries."""

import asyncio
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from household.core.logging import get_logger
from household.services.auth import TokenService

logger = get_logger("blacklist_sweeper")

# Once a day
DEFAULT_INTERVAL_SECONDS = 24 * 60 * 60


class BlacklistSweeper:
    """Background job that deletes blacklist rows past their expiry.

    A failed sweep is logged and retried on the next interval. Stale rows
    cannot make a revoked token valid again; they only take up space.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ):
        self._session_factory = session_factory
        self._interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    async def start(self) -> None:
        """Start the background sweep task."""
        if self.running:
            logger.warning("Blacklist sweeper is already running")
            return

        self._task = asyncio.create_task(self._sweep_loop(), name="blacklist-sweeper")
        logger.info(f"Blacklist sweeper started (interval: {self._interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the background sweep task."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Blacklist sweeper stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            try:
                await self.run_now()
            except Exception:
                logger.exception("Error sweeping token blacklist")

    async def run_now(self, now: datetime | None = None) -> int:
        """Run one sweep immediately.

        Returns:
            Number of blacklist entries deleted
        """
        async with self._session_factory() as session:
            try:
                removed = await TokenService(session).sweep(now=now)
                await session.commit()
            except Exception:
                await session.rollback()
                raise

        if removed > 0:
            logger.info(f"Swept {removed} expired token blacklist entries")
        return removed
