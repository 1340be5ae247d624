"""Player statistics service and an in-memory player store."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from pingshow.model import Player
from pingshow.ports import PlayerRepository


class PlayerNotFoundError(LookupError):
    """Raised when a player id is unknown."""

    def __init__(self, player_id: str) -> None:
        super().__init__(f"player not found: {player_id}")
        self.player_id = player_id


class InMemoryPlayerRepository:
    """Keeps players in a dictionary; seeded with players A and B by default."""

    def __init__(self, players: Iterable[Player] | None = None) -> None:
        if players is None:
            players = [Player("A", "Player A"), Player("B", "Player B")]
        self._players = {p.player_id: replace(p) for p in players}

    def get_player(self, player_id: str) -> Player:
        try:
            return replace(self._players[player_id])
        except KeyError:
            raise PlayerNotFoundError(player_id) from None

    def save_player(self, player: Player) -> None:
        self._players[player.player_id] = replace(player)


class PlayerService:
    """Reads and updates player statistics."""

    def __init__(self, player_repository: PlayerRepository) -> None:
        self._repository = player_repository

    def get_player_info(self, player_id: str) -> Player:
        """Return the stored player."""
        return self._repository.get_player(player_id)

    def update_player_stats(self, player_id: str, win: bool, power_used: int) -> None:
        """Record one game for the player and store the result."""
        player = self._repository.get_player(player_id)
        player.update_stats(win)
        self._repository.save_player(player)