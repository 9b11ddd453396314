"""Tests for per-key serialization."""

import asyncio

import pytest

from frioger_bot.conversation.keyed_lock import KeyedLock


class TestKeyedLock:
    @pytest.mark.asyncio
    async def test_same_key_runs_one_at_a_time(self):
        locks = KeyedLock()
        events: list[str] = []

        async def worker(tag: str) -> None:
            async with locks.hold("user"):
                events.append(f"{tag}-start")
                await asyncio.sleep(0.01)
                events.append(f"{tag}-end")

        await asyncio.gather(worker("a"), worker("b"))
        assert events == ["a-start", "a-end", "b-start", "b-end"]

    @pytest.mark.asyncio
    async def test_different_keys_interleave(self):
        locks = KeyedLock()
        events: list[str] = []

        async def worker(key: str) -> None:
            async with locks.hold(key):
                events.append(f"{key}-start")
                await asyncio.sleep(0.01)
                events.append(f"{key}-end")

        await asyncio.gather(worker("a"), worker("b"))
        assert events[:2] == ["a-start", "b-start"]

    @pytest.mark.asyncio
    async def test_locks_released_after_use(self):
        locks = KeyedLock()
        async with locks.hold("user"):
            assert len(locks) == 1
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_released_on_error(self):
        locks = KeyedLock()
        with pytest.raises(RuntimeError):
            async with locks.hold("user"):
                raise RuntimeError("boom")
        assert len(locks) == 0
        async with locks.hold("user"):
            pass
