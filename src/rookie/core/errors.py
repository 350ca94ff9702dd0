"""Exceptions raised by the rules engine."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for engine errors."""


class IllegalMove(ChessError, ValueError):
    """The requested move is not legal in the current position.

    The game state is left exactly as it was before the request.
    """


class GameOverError(IllegalMove):
    """A move was requested after the game reached a terminal outcome."""
