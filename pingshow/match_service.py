"""Simulated ping-pong matches between player A, the table and player B."""

from __future__ import annotations

import asyncio
import random
import time
from dataclasses import dataclass
from datetime import datetime

from pingshow.model import Match, MatchEvent
from pingshow.ports import MatchRepository


class InMemoryMatchRepository:
    """Keeps a match counter and the finished matches in memory."""

    def __init__(self, start: int = 0) -> None:
        self.latest_match_number = start
        self.matches: list[Match] = []

    def increment_match_number(self) -> int:
        self.latest_match_number += 1
        return self.latest_match_number

    def save_match(self, match: Match) -> None:
        self.matches.append(match)


@dataclass(frozen=True)
class MatchSnapshot:
    """Summary of the current match for display."""

    rally: int
    player1_score: int
    player2_score: int


class _MatchEventStream:
    """Async iterator over the terminal events of one running match."""

    def __init__(self, queue: asyncio.Queue, cancelled: asyncio.Event) -> None:
        self._queue = queue
        self._cancelled = cancelled
        self._task: asyncio.Task | None = None

    def cancel(self) -> None:
        """Stop the match; the stream then yields a ``game_cancelled`` event."""
        self._cancelled.set()

    def __aiter__(self) -> _MatchEventStream:
        return self

    async def __anext__(self) -> MatchEvent:
        item = await self._queue.get()
        if item is None:
            raise StopAsyncIteration
        return item


class MatchService:
    """Runs matches: A serves, the table dampens the ball, B returns or loses."""

    def __init__(
        self,
        match_repository: MatchRepository,
        rng: random.Random | None = None,
        delay: float = 0.2,
    ) -> None:
        self._repository = match_repository
        self._rng = rng if rng is not None else random.Random()
        self._delay = delay
        self.match: Match | None = None

    async def start_new_match(self) -> tuple[Match, _MatchEventStream]:
        """Start a new match in the background; return it and its event stream."""
        match = Match(self._repository.increment_match_number())
        self.match = match
        queue: asyncio.Queue = asyncio.Queue()
        cancelled = asyncio.Event()
        stream = _MatchEventStream(queue, cancelled)
        stream._task = asyncio.create_task(self._run_game(match, queue, cancelled))
        return match, stream

    async def _run_game(
        self, match: Match, queue: asyncio.Queue, cancelled: asyncio.Event
    ) -> None:
        a_chan: asyncio.Queue[int] = asyncio.Queue(maxsize=1)
        b_chan: asyncio.Queue[int] = asyncio.Queue(maxsize=1)
        finished = asyncio.Event()

        initial_power = self._rng.randrange(50) + 50
        match.set_current_power(initial_power)

        players = [asyncio.create_task(self._player_a(match, a_chan, b_chan))]
        await a_chan.put(initial_power)
        players.append(
            asyncio.create_task(self._player_b(match, a_chan, b_chan, finished))
        )

        waiters = {
            asyncio.create_task(finished.wait()),
            asyncio.create_task(cancelled.wait()),
        }
        try:
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in [*waiters, *players]:
                task.cancel()
            await asyncio.gather(*waiters, *players, return_exceptions=True)

        if finished.is_set():
            event = MatchEvent(time=datetime.now(), player="System", event_type="game_over")
            match.add_event(event)
            await queue.put(event)
            self._repository.save_match(match)
        else:
            event = MatchEvent(
                time=datetime.now(), player="System", event_type="game_cancelled"
            )
            match.add_event(event)
            await queue.put(event)
        await queue.put(None)

    @staticmethod
    def _player_event(player: str, power: int, event_type: str) -> MatchEvent:
        return MatchEvent(
            time=datetime.now(),
            player=player,
            power=power,
            goroutine=f"{player}-{time.time_ns()}",
            duration=time.time_ns() // 1_000_000,
            event_type=event_type,
        )

    async def _player_a(
        self, match: Match, a_chan: asyncio.Queue, b_chan: asyncio.Queue
    ) -> None:
        while True:
            power = await a_chan.get()
            match.add_event(self._player_event("A", power, "ping"))
            reduction = (self._rng.randrange(20) + 10) / 100.0
            table_power = int(power * (1.0 - reduction))
            match.set_current_power(table_power)
            await asyncio.sleep(self._delay)
            await b_chan.put(table_power)

    async def _player_b(
        self,
        match: Match,
        a_chan: asyncio.Queue,
        b_chan: asyncio.Queue,
        finished: asyncio.Event,
    ) -> None:
        while True:
            table_power = await b_chan.get()
            b_power = self._rng.randrange(100) + 1
            match.add_event(self._player_event("B", b_power, "pong"))
            if b_power > table_power:
                await asyncio.sleep(self._delay)
                await a_chan.put(b_power)
            else:
                match.end_game()
                match.add_event(self._player_event("B", b_power, "lose"))
                finished.set()
                return

    def get_current_match(self) -> MatchSnapshot | None:
        """Summarise the current match, or return None if none has started."""
        if self.match is None:
            return None
        events = self.match.events
        return MatchSnapshot(
            rally=len(events),
            player1_score=sum(1 for e in events if e.event_type == "ping"),
            player2_score=sum(1 for e in events if e.event_type == "pong"),
        )