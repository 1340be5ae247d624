import asyncio
import random

import pytest

from pingshow.match_service import InMemoryMatchRepository, MatchService


class _FixedRandom:
    """Always returns the same end of the range."""

    def __init__(self, high: bool) -> None:
        self.high = high

    def randrange(self, stop):
        return stop - 1 if self.high else 0


async def _collect(stream):
    return [event async for event in stream]


def test_repository_increments():
    repo = InMemoryMatchRepository()
    assert repo.increment_match_number() == 1
    assert repo.increment_match_number() == 2
    assert repo.latest_match_number == 2


def test_no_current_match_before_start():
    service = MatchService(InMemoryMatchRepository())
    assert service.get_current_match() is None


@pytest.mark.asyncio
async def test_match_ends_with_game_over_and_is_saved():
    repo = InMemoryMatchRepository()
    service = MatchService(repo, rng=random.Random(3), delay=0)
    match, stream = await service.start_new_match()
    events = await asyncio.wait_for(_collect(stream), timeout=5)
    assert [e.event_type for e in events] == ["game_over"]
    assert match.match_number == 1
    assert repo.matches == [match]
    assert match.is_game_over
    kinds = [e.event_type for e in match.events]
    assert kinds[-2:] == ["lose", "game_over"]


@pytest.mark.asyncio
async def test_rally_alternates_ping_and_pong():
    service = MatchService(InMemoryMatchRepository(), rng=random.Random(11), delay=0)
    match, stream = await service.start_new_match()
    await asyncio.wait_for(_collect(stream), timeout=5)
    rally = [e for e in match.events if e.event_type in ("ping", "pong")]
    assert [e.event_type for e in rally] == ["ping", "pong"] * (len(rally) // 2)
    assert all(50 <= e.power <= 100 for e in rally if e.event_type == "ping")
    assert all(1 <= e.power <= 100 for e in rally if e.event_type == "pong")


@pytest.mark.asyncio
async def test_weak_return_loses_immediately():
    service = MatchService(InMemoryMatchRepository(), rng=_FixedRandom(False), delay=0)
    match, stream = await service.start_new_match()
    await asyncio.wait_for(_collect(stream), timeout=5)
    kinds = [e.event_type for e in match.events]
    assert kinds == ["ping", "pong", "lose", "game_over"]
    assert match.events[0].power == 50
    assert match.events[0].goroutine.startswith("A-")


@pytest.mark.asyncio
async def test_snapshot_counts_events():
    service = MatchService(InMemoryMatchRepository(), rng=random.Random(5), delay=0)
    match, stream = await service.start_new_match()
    await asyncio.wait_for(_collect(stream), timeout=5)
    snapshot = service.get_current_match()
    assert snapshot.rally == len(match.events)
    assert snapshot.player1_score == sum(e.event_type == "ping" for e in match.events)
    assert snapshot.player1_score == snapshot.player2_score


@pytest.mark.asyncio
async def test_cancel_yields_game_cancelled_and_does_not_save():
    repo = InMemoryMatchRepository()
    service = MatchService(repo, rng=_FixedRandom(True), delay=0.005)
    match, stream = await service.start_new_match()
    await asyncio.sleep(0.05)
    stream.cancel()
    events = await asyncio.wait_for(_collect(stream), timeout=5)
    assert [e.event_type for e in events] == ["game_cancelled"]
    assert repo.matches == []
    assert match.is_game_over is False
    assert match.events[-1].event_type == "game_cancelled"