"""Ping-pong match simulation with in-memory player statistics and a CSV match log."""

__version__ = "0.1.0"

__all__ = [
    "client",
    "handlers",
    "mapper",
    "match_service",
    "model",
    "player_service",
    "ports",
]