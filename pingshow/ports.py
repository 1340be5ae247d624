"""Interfaces between the domain services and their adapters."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from pingshow.model import Match, MatchEvent, Player


class PlayerRepository(Protocol):
    """Storage for players."""

    def get_player(self, player_id: str) -> Player:
        """Return the player with the given id."""

    def save_player(self, player: Player) -> None:
        """Store the player."""


class MatchRepository(Protocol):
    """Storage for matches."""

    def increment_match_number(self) -> int:
        """Advance and return the match counter."""

    def save_match(self, match: Match) -> None:
        """Store a finished match."""


class PlayerUseCase(Protocol):
    """Incoming port for player management."""

    def get_player_info(self, player_id: str) -> Player:
        """Return the player's information."""

    def update_player_stats(self, player_id: str, win: bool, power_used: int) -> None:
        """Record the outcome of one game for the player."""


class MatchUseCase(Protocol):
    """Incoming port for running matches."""

    async def start_match(self, new_game: bool) -> AsyncIterator[MatchEvent]:
        """Start a match and return its stream of events."""

    async def get_latest_match(self) -> int:
        """Return the number of the latest match."""