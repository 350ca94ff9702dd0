"""Core domain layer: pure chess rules with no third-party dependencies.

Quick start::

    from rookie.core import Board, MoveGenerator, Color, parse_square

    board = Board.initial()
    gen = MoveGenerator(board)
    gen.legal_moves(parse_square("e2"))   # {Square(5, 4), Square(4, 4)}
    gen.is_in_check(Color.WHITE)          # False
"""

from rookie.core.board import Board
from rookie.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    DrawReason,
    GameStatus,
    PieceType,
)
from rookie.core.errors import ChessError, GameOverError, IllegalMove
from rookie.core.move import Move
from rookie.core.move_generator import MoveGenerator
from rookie.core.notation import (
    STARTING_FEN,
    board_from_layout,
    board_to_layout,
    move_notation,
    position_from_fen,
    position_to_fen,
)
from rookie.core.piece import Piece
from rookie.core.position import Position, apply_move_to_board
from rookie.core.rules import Rules
from rookie.core.types import Square, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "DrawReason",
    "GameStatus",
    "PROMOTION_TYPES",
    "PieceType",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "apply_move_to_board",
    # Errors
    "ChessError",
    "GameOverError",
    "IllegalMove",
    # Notation
    "STARTING_FEN",
    "board_from_layout",
    "board_to_layout",
    "move_notation",
    "position_from_fen",
    "position_to_fen",
]
