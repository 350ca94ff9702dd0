"""Abstract seams of the game layer.

``GameController`` talks to players only through :class:`IPlayer`, so a UI
can plug in its own participants.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rookie.core.enums import Color, PieceType
    from rookie.core.position import Position
    from rookie.core.types import Square
    from rookie.game.state import RuleSet


class GamePhase(IntEnum):
    """Where the controller is in its turn cycle."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()  # a human is to move
    THINKING = auto()  # an AI request is outstanding
    GAME_OVER = auto()


class IPlayer(ABC):
    """One side of the board, human or computer."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, position: Position) -> None:
        """Called when it is this player's turn.

        *position* is a private copy; the live game is never handed out.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Forget any outstanding move request."""


class IGameController(ABC):
    """Drives one game between two players."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        fen: str | None = None,
        rules: RuleSet | None = None,
    ) -> None: ...

    @abstractmethod
    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Play a move for the side to move; False if it was rejected."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Take back the last move; False if there is nothing to undo."""
