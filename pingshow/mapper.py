"""Wire messages and conversions between them and domain objects."""

from __future__ import annotations

from dataclasses import dataclass

from pingshow.model import MatchEvent, Player


@dataclass(frozen=True)
class MatchEventMessage:
    time: str
    player: str
    power: int
    goroutine: str
    match_number: int
    duration: int
    event_type: str


@dataclass(frozen=True)
class PlayerInfoMessage:
    player_id: str
    name: str
    total_games: int
    wins: int


@dataclass(frozen=True)
class PlayerStatsMessage:
    player_id: str
    win: bool
    power_used: int


@dataclass(frozen=True)
class PlayerRequest:
    player_id: str


@dataclass(frozen=True)
class StartRequest:
    new_game: bool = False


def map_to_proto_match_event(event: MatchEvent) -> MatchEventMessage:
    """Convert a domain event; the match number is left for the caller to set."""
    stamp = event.time
    return MatchEventMessage(
        time=f"{stamp:%H:%M:%S}.{stamp.microsecond // 1000:03d}",
        player=event.player,
        power=event.power,
        goroutine=event.goroutine,
        match_number=0,
        duration=event.duration,
        event_type=event.event_type,
    )


def map_to_proto_player_info(player: Player) -> PlayerInfoMessage:
    """Convert a player to its wire message."""
    return PlayerInfoMessage(
        player_id=player.player_id,
        name=player.name,
        total_games=player.total_games,
        wins=player.wins,
    )


def map_from_proto_player_stats(stats: PlayerStatsMessage) -> tuple[str, bool, int]:
    """Unpack a stats message into player id, win flag and power used."""
    return stats.player_id, stats.win, stats.power_used