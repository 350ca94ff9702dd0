"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookie.core.enums import PieceType
from rookie.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from rookie.core.position import Position

_MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Fifty-move and threefold repetition end the game automatically, no claim
    # needed.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator.for_position(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def has_legal_move(position: Position) -> bool:
        gen = MoveGenerator.for_position(position)
        return gen.has_any_legal_move(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.is_in_check(position) and not Rules.has_legal_move(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return not Rules.is_in_check(position) and not Rules.has_legal_move(position)

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+minor vs K, or only bishops, all on one square colour."""
        occupied = position.board.pieces()
        others = [
            (sq, piece)
            for sq, piece in occupied
            if piece.piece_type != PieceType.KING
        ]

        # K vs K
        if not others:
            return True

        # K+minor vs K
        if len(others) == 1:
            return others[0][1].piece_type in _MINOR_PIECES

        # Bishops only, whoever owns them, all on one square colour
        if all(piece.piece_type == PieceType.BISHOP for _sq, piece in others):
            return len({(sq.row + sq.col) % 2 for sq, _piece in others}) == 1

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_threefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 3

