"""Match simulator that plays repeated games and logs every move to CSV."""

from __future__ import annotations

import argparse
import csv
import logging
import random
import signal
import sys
import threading
import time
from collections.abc import Callable
from datetime import datetime
from typing import TextIO

from pingshow.handlers import PlayerHandler
from pingshow.mapper import PlayerRequest, PlayerStatsMessage
from pingshow.player_service import InMemoryPlayerRepository, PlayerService

logger = logging.getLogger(__name__)

CSV_HEADER = ("Time", "Event", "Player", "Power", "Goroutine", "Match Number", "Turn")
POWER_USED = 50


def _rfc3339(moment: datetime) -> str:
    stamp = moment.isoformat(timespec="seconds")
    if stamp.endswith("+00:00"):
        stamp = stamp[: -len("+00:00")] + "Z"
    return stamp


def _local_now() -> datetime:
    return datetime.now().astimezone()


class MatchLogWriter:
    """Writes match events as CSV rows, starting with a header row."""

    def __init__(
        self, stream: TextIO, clock: Callable[[], datetime] | None = None
    ) -> None:
        self._stream = stream
        self._writer = csv.writer(stream, lineterminator="\n")
        self._clock = clock if clock is not None else _local_now
        self._writer.writerow(CSV_HEADER)

    def write_event(
        self,
        event: str,
        player: str,
        power: int,
        goroutine: str,
        match_number: int,
        turn: int,
    ) -> str:
        """Write one row stamped with the current time; return that timestamp."""
        stamp = _rfc3339(self._clock())
        self._writer.writerow(
            [stamp, event, player, str(power), goroutine, str(match_number), str(turn)]
        )
        return stamp

    def flush(self) -> None:
        """Push buffered rows to the underlying stream."""
        self._stream.flush()


class GameSimulator:
    """Plays matches between A, the table and B, updating player statistics."""

    def __init__(
        self,
        players: PlayerHandler,
        match_log: MatchLogWriter,
        *,
        rng: random.Random | None = None,
        delay: float = 0.2,
        pause: float = 2.0,
        max_matches: int | None = None,
        out: TextIO | None = None,
    ) -> None:
        self._players = players
        self._log = match_log
        self._rng = rng if rng is not None else random.Random()
        self._delay = delay
        self._pause = pause
        self._max_matches = max_matches
        self._out = out

    def _print(self, text: str = "") -> None:
        print(text, file=self._out if self._out is not None else sys.stdout)

    def _print_move(
        self, stamp: str, player: str, power: int, goroutine: str, match: int, turn: int
    ) -> None:
        self._print(
            f"⏰ {stamp} | 🎮 {player} | 💪 {power} | 🧵 {goroutine} "
            f"| #{match} | รอบที่ {turn}"
        )

    def play_match(self, match_number: int) -> int:
        """Play one match to B's loss, log it and record the result; return the last turn."""
        log = self._log
        log.write_event("start_game", "System", 0, "main", match_number, 0)

        goroutine_a = f"A-{time.time_ns()}"
        turn_a = 1
        power = self._rng.randrange(50) + 50
        stamp = log.write_event("wake_up", "A", 0, goroutine_a, match_number, turn_a)
        self._print_move(stamp, "A", power, goroutine_a, match_number, turn_a)
        log.write_event("ping", "A", power, goroutine_a, match_number, turn_a)

        goroutine_b = f"B-{time.time_ns()}"
        turn_b = 2
        log.write_event("wake_up", "B", 0, goroutine_b, match_number, turn_b)

        while True:
            reduction = (self._rng.randrange(20) + 10) / 100.0
            table_power = int(power * (1.0 - reduction))
            stamp = log.write_event(
                "table_response", "Table", table_power, "Table", match_number, 0
            )
            self._print(
                f"⏰ {stamp} | 🎮 Table | 💪 {table_power} | 🧵 Table | #{match_number}"
            )
            if self._delay:
                time.sleep(self._delay)

            stamp = log.write_event(
                "wake_up", "B", table_power, goroutine_b, match_number, turn_b
            )
            b_power = self._rng.randrange(100) + 1
            self._print_move(stamp, "B", b_power, goroutine_b, match_number, turn_b)
            log.write_event("pong", "B", b_power, goroutine_b, match_number, turn_b)

            if b_power <= table_power:
                break
            turn_b += 2

            turn_a += 2
            stamp = log.write_event(
                "wake_up", "A", b_power, goroutine_a, match_number, turn_a
            )
            power = self._rng.randrange(50) + 50
            self._print_move(stamp, "A", power, goroutine_a, match_number, turn_a)
            log.write_event("ping", "A", power, goroutine_a, match_number, turn_a)

        stamp = log.write_event("lose", "B", b_power, goroutine_b, match_number, turn_b)
        self._print(
            f"⏰ {stamp} | 🎮 B | 💥 แพ้! | 🧵 {goroutine_b} | #{match_number} "
            f"| รอบที่ {turn_b}"
        )
        log.write_event("game_over", "System", 0, "main", match_number, turn_b)

        for player_id, win in (("A", True), ("B", False)):
            try:
                self._players.update_player_stats(
                    PlayerStatsMessage(player_id=player_id, win=win, power_used=POWER_USED)
                )
            except Exception as exc:
                logger.error("cannot update stats of player %s: %s", player_id, exc)
        return turn_b

    def run(self, stop: threading.Event | None = None) -> int:
        """Play matches until stopped or the match limit is hit; return how many were played."""
        if stop is None:
            stop = threading.Event()
        played = 0
        while not stop.is_set():
            if self._max_matches is not None and played >= self._max_matches:
                break
            try:
                info = self._players.get_player_info(PlayerRequest(player_id="A"))
            except Exception as exc:
                logger.error("cannot fetch player A: %s", exc)
                break
            match_number = info.total_games + 1
            self._print("\n========================================")
            self._print(f"🎮 เริ่มเกมใหม่ หมายเลขแมตช์: {match_number}")
            self._print("========================================\n")

            self.play_match(match_number)
            played += 1

            self._print("\n👋 เกมจบแล้ว B แพ้! กำลังเริ่มเกมใหม่...")
            self._log.flush()
            if self._max_matches is None or played < self._max_matches:
                stop.wait(self._pause)
        return played


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pingshow", description="Simulate ping-pong matches and log them to CSV."
    )
    parser.add_argument("--csv", default="match_log.csv", help="path of the CSV log")
    parser.add_argument(
        "--matches", type=int, default=0, help="number of matches to play (0 = forever)"
    )
    parser.add_argument(
        "--delay", type=float, default=0.2, help="seconds the table takes per rally"
    )
    parser.add_argument(
        "--pause", type=float, default=2.0, help="seconds to wait between matches"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the match simulator until interrupted or the match limit is reached."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    players = PlayerHandler(PlayerService(InMemoryPlayerRepository()))
    stop = threading.Event()

    previous: dict[int, object] = {}
    if threading.current_thread() is threading.main_thread():
        for signum in (signal.SIGINT, signal.SIGTERM):
            previous[signum] = signal.signal(signum, lambda *_: stop.set())

    try:
        with open(args.csv, "w", newline="", encoding="utf-8") as handle:
            match_log = MatchLogWriter(handle)
            simulator = GameSimulator(
                players,
                match_log,
                delay=args.delay,
                pause=args.pause,
                max_matches=args.matches or None,
            )
            simulator.run(stop)
            match_log.flush()
    except OSError as exc:
        logger.error("cannot write CSV file %s: %s", args.csv, exc)
        return 1
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())