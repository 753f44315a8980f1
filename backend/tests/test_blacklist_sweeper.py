"""Tests for the background blacklist sweeper."""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy import select

from household.models import TokenBlacklist
from household.services.blacklist_sweeper import BlacklistSweeper


async def _seed(database, **entries: timedelta) -> None:
    now = datetime.now(UTC)
    async with database.session_maker() as session:
        session.add_all(
            TokenBlacklist(token=token, expires_at=now + offset) for token, offset in entries.items()
        )
        await session.commit()


async def _remaining(database) -> set[str]:
    async with database.session_maker() as session:
        result = await session.execute(select(TokenBlacklist.token))
        return set(result.scalars().all())


@pytest.mark.asyncio
async def test_run_now_deletes_expired_entries(database):
    await _seed(database, old=timedelta(hours=-1), fresh=timedelta(hours=1))
    sweeper = BlacklistSweeper(database.session_maker)

    assert await sweeper.run_now() == 1
    assert await _remaining(database) == {"fresh"}


@pytest.mark.asyncio
async def test_run_now_with_explicit_time(database):
    await _seed(database, soon=timedelta(minutes=5))
    sweeper = BlacklistSweeper(database.session_maker)

    assert await sweeper.run_now() == 0
    assert await sweeper.run_now(now=datetime.now(UTC) + timedelta(minutes=10)) == 1
    assert await _remaining(database) == set()


@pytest.mark.asyncio
async def test_background_loop_sweeps_periodically(database):
    await _seed(database, old=timedelta(hours=-1))
    sweeper = BlacklistSweeper(database.session_maker, interval_seconds=0.01)

    await sweeper.start()
    try:
        assert sweeper.running
        for _ in range(200):
            if not await _remaining(database):
                break
            await asyncio.sleep(0.01)
        assert await _remaining(database) == set()
    finally:
        await sweeper.stop()

    assert not sweeper.running


@pytest.mark.asyncio
async def test_start_twice_keeps_single_task(database):
    sweeper = BlacklistSweeper(database.session_maker, interval_seconds=3600)

    await sweeper.start()
    task = sweeper._task
    await sweeper.start()

    assert sweeper._task is task
    await sweeper.stop()


@pytest.mark.asyncio
async def test_failed_sweep_does_not_stop_loop():
    """A failing sweep is logged and retried on the next interval."""
    session_factory = MagicMock(side_effect=RuntimeError("database unavailable"))
    sweeper = BlacklistSweeper(session_factory, interval_seconds=0.01)

    await sweeper.start()
    try:
        for _ in range(200):
            if session_factory.call_count >= 2:
                break
            await asyncio.sleep(0.01)
        assert session_factory.call_count >= 2
        assert sweeper.running
    finally:
        await sweeper.stop()


@pytest.mark.asyncio
async def test_run_now_propagates_errors():
    sweeper = BlacklistSweeper(MagicMock(side_effect=RuntimeError("boom")))

    with pytest.raises(RuntimeError):
        await sweeper.run_now()


@pytest.mark.asyncio
async def test_stop_without_start_is_safe():
    sweeper = BlacklistSweeper(MagicMock())
    await sweeper.stop()
    assert not sweeper.running
