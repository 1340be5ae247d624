"""Domain objects: match events, matches and players."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class MatchEvent:
    """Something that happened during a match."""

    time: datetime
    player: str = ""
    power: int = 0
    goroutine: str = ""
    duration: int = 0
    event_type: str = ""


@dataclass
class Match:
    """A single match and the events recorded for it."""

    match_number: int
    events: list[MatchEvent] = field(default_factory=list)
    current_power: int = 0
    is_game_over: bool = False

    def add_event(self, event: MatchEvent) -> None:
        """Record an event in the match."""
        self.events.append(event)

    def set_current_power(self, power: int) -> None:
        """Set the power currently in play."""
        self.current_power = power

    def end_game(self) -> None:
        """Mark the match as finished."""
        self.is_game_over = True


@dataclass
class Player:
    """A player and their game statistics."""

    player_id: str
    name: str
    total_games: int = 0
    wins: int = 0

    def update_stats(self, win: bool) -> None:
        """Count one more game, and one more win if ``win`` is true."""
        self.total_games += 1
        if win:
            self.wins += 1