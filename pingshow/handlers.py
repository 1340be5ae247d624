"""Request handlers for the table and player services."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import replace

from pingshow.mapper import (
    MatchEventMessage,
    PlayerInfoMessage,
    PlayerRequest,
    PlayerStatsMessage,
    StartRequest,
    map_from_proto_player_stats,
    map_to_proto_match_event,
    map_to_proto_player_info,
)
from pingshow.match_service import MatchService
from pingshow.ports import PlayerUseCase


class MatchHandler:
    """Starts matches and streams their events to the caller."""

    def __init__(self, match_service: MatchService) -> None:
        self._service = match_service

    async def start_match(
        self,
        request: StartRequest,
        send: Callable[[MatchEventMessage], Awaitable[None] | None],
    ) -> None:
        """Run a match, passing each streamed event to ``send``."""
        match, events = await self._service.start_new_match()
        async for event in events:
            message = replace(
                map_to_proto_match_event(event), match_number=match.match_number
            )
            try:
                result = send(message)
                if inspect.isawaitable(result):
                    await result
            except BaseException:
                events.cancel()
                raise


class PlayerHandler:
    """Answers player information and statistics requests."""

    def __init__(self, player_use_case: PlayerUseCase) -> None:
        self._use_case = player_use_case

    def get_player_info(self, request: PlayerRequest) -> PlayerInfoMessage:
        player = self._use_case.get_player_info(request.player_id)
        return map_to_proto_player_info(player)

    def update_player_stats(self, request: PlayerStatsMessage) -> None:
        player_id, win, power_used = map_from_proto_player_stats(request)
        self._use_case.update_player_stats(player_id, win, power_used)