"""Core enumerations and flags for the rules engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def pawn_direction(self) -> int:
        """Row step of a forward pawn move (white advances towards row 0)."""
        return -1 if self is Color.WHITE else 1

    @property
    def pawn_start_row(self) -> int:
        return 6 if self is Color.WHITE else 1

    @property
    def home_row(self) -> int:
        """Row holding this side's king and rooks at the start."""
        return 7 if self is Color.WHITE else 0

    @property
    def promotion_row(self) -> int:
        """The opponent's back rank, where this side's pawns promote."""
        return 0 if self is Color.WHITE else 7

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Lowercase letter used in move notation, e.g. ``"n"``."""
        return _LETTERS[self]


_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameStatus(IntEnum):
    """Where a game stands after the last applied move."""

    IN_PROGRESS = 0
    CHECKMATE = 1
    STALEMATE = 2
    DRAW = 3


class DrawReason(IntEnum):
    """Rule that ended a game in a draw (other than stalemate)."""

    FIFTY_MOVE_RULE = 1
    THREEFOLD_REPETITION = 2
    INSUFFICIENT_MATERIAL = 3
