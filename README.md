# pingshow

A small ping-pong match simulator. Player A serves with a random power
(50–99), the table absorbs 10–29% of it, and player B returns with a random
power (1–100). B has to hit harder than what came off the table; when B
fails, the match ends, A is credited with a win and B with a loss.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the simulation

```
pingshow
```

This plays match after match, printing each shot to the terminal and writing
every step to a CSV log, until you press Ctrl+C (or the process receives
SIGTERM). The log file is created afresh on each run. Options:

- `--csv PATH` – where to write the log (default `match_log.csv`).
- `--matches N` – stop after `N` matches (default `0`, meaning run forever).
- `--delay SECONDS` – time the table takes per rally (default `0.2`).
- `--pause SECONDS` – wait between matches (default `2.0`).

The CSV log has the columns `Time`, `Event`, `Player`, `Power`, `Goroutine`,
`Match Number` and `Turn`. Events are `start_game`, `wake_up`, `ping`,
`table_response`, `pong`, `lose` and `game_over`. Times are RFC 3339
timestamps to the second. A plays the odd turns and B the even ones; table
responses and `start_game` rows carry turn `0`.

Each match number is player A's game count plus one.

## Using it as a library

- `pingshow.model` – `MatchEvent`, `Match` and `Player` dataclasses.
- `pingshow.ports` – the interfaces `PlayerRepository`, `MatchRepository`,
  `PlayerUseCase` and `MatchUseCase`.
- `pingshow.player_service` – `PlayerService` and `InMemoryPlayerRepository`
  (seeded with players `A` and `B`); unknown player ids raise
  `PlayerNotFoundError`.
- `pingshow.match_service` – `MatchService`, which runs a match as asyncio
  tasks and streams its closing event, plus `InMemoryMatchRepository` and the
  `MatchSnapshot` returned by `get_current_match()`.
- `pingshow.mapper` – message types (`MatchEventMessage`, `PlayerInfoMessage`,
  `PlayerStatsMessage`, `PlayerRequest`, `StartRequest`) and the functions
  `map_to_proto_match_event`, `map_to_proto_player_info` and
  `map_from_proto_player_stats`.
- `pingshow.handlers` – `MatchHandler` and `PlayerHandler`, which answer
  requests in these message types on top of the services.
- `pingshow.client` – `MatchLogWriter`, `GameSimulator` and `main`, the pieces
  behind the `pingshow` command.

Player statistics:

```python
from pingshow.player_service import InMemoryPlayerRepository, PlayerService

service = PlayerService(InMemoryPlayerRepository())
service.update_player_stats("A", True, 50)
print(service.get_player_info("A"))
# Player(player_id='A', name='Player A', total_games=1, wins=1)
```

Running a match in the background:

```python
import asyncio

from pingshow.match_service import InMemoryMatchRepository, MatchService


async def play() -> None:
    service = MatchService(InMemoryMatchRepository(), delay=0.0)
    match, events = await service.start_new_match()
    async for event in events:
        print(match.match_number, event.event_type)  # 1 game_over
    print(service.get_current_match())


asyncio.run(play())
```

The stream yields `game_over` when B loses (the match is then saved to the
repository), or `game_cancelled` if `cancel()` is called on it first. The
individual `ping`, `pong` and `lose` events are recorded in `match.events`.

## What it does not do

- Player statistics and match numbers live only in memory; nothing is kept
  between runs, and there is no database storage.
- The handlers are plain in-process objects; the package runs no network
  server and opens no network connections.
- The CSV log is only written, never read back or imported anywhere.