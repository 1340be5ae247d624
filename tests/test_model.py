from datetime import datetime

from pingshow.model import Match, MatchEvent, Player


def _event(kind: str) -> MatchEvent:
    return MatchEvent(time=datetime(2024, 1, 1), player="A", power=60, event_type=kind)


def test_new_match_starts_empty():
    match = Match(7)
    assert match.match_number == 7
    assert match.events == []
    assert match.current_power == 0
    assert match.is_game_over is False


def test_add_event_keeps_order():
    match = Match(1)
    first, second = _event("ping"), _event("pong")
    match.add_event(first)
    match.add_event(second)
    assert match.events == [first, second]


def test_matches_do_not_share_events():
    one, two = Match(1), Match(2)
    one.add_event(_event("ping"))
    assert two.events == []


def test_set_current_power():
    match = Match(1)
    match.set_current_power(73)
    assert match.current_power == 73


def test_end_game():
    match = Match(1)
    match.end_game()
    assert match.is_game_over is True


def test_new_player_has_no_games():
    player = Player("A", "Alice")
    assert (player.total_games, player.wins) == (0, 0)


def test_update_stats_win_and_loss():
    player = Player("A", "Alice")
    player.update_stats(True)
    player.update_stats(False)
    player.update_stats(True)
    assert player.total_games == 3
    assert player.wins == 2


def test_update_stats_loss_only_counts_game():
    player = Player("B", "Bob")
    player.update_stats(False)
    assert player.total_games == 1
    assert player.wins == 0