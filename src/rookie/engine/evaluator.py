"""One-ply heuristic move evaluator.

Every legal move of the side to play is tried on a scratch copy of the board
and scored by material balance plus a few tactical bonuses. The best score
wins; equal scores are broken uniformly at random.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace

from rookie.core.board import Board
from rookie.core.enums import CastlingRights, Color, PieceType
from rookie.core.move import Move
from rookie.core.move_generator import MoveGenerator
from rookie.core.position import Position, apply_move_to_board, is_castling_move
from rookie.core.types import Square

_LOGGER = logging.getLogger(__name__)

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 100,
}


@dataclass(frozen=True, slots=True)
class EvaluationWeights:
    """Multipliers and bonuses applied on top of the material balance."""

    capture_multiplier: int = 10
    check_bonus: int = 50
    risk_multiplier: int = 5
    castle_bonus: int = 30


def material_score(board: Board, color: Color) -> int:
    """Sum of *color*'s piece values minus the opponent's."""
    score = 0
    for _sq, piece in board.pieces():
        value = PIECE_VALUES[piece.piece_type]
        score += value if piece.color == color else -value
    return score


class MoveEvaluator:
    """Picks a move for one side by scoring each candidate one ply deep."""

    __slots__ = ("_weights", "_rng")

    def __init__(
        self,
        weights: EvaluationWeights | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._weights = weights or EvaluationWeights()
        self._rng = rng or random.Random()

    @property
    def weights(self) -> EvaluationWeights:
        return self._weights

    # -- Scoring -------------------------------------------------------------

    def score_move(self, board: Board, color: Color, move: Move) -> int:
        """Score *move* for *color*. *board* itself is left untouched.

        The risk penalty looks at the board before the move, so a piece that
        captures its own attacker is still penalised.
        """
        weights = self._weights
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        before = MoveGenerator(board)
        at_risk = before.is_square_attacked(move.to_sq, color.opposite)

        scratch = board.clone()
        captured = apply_move_to_board(scratch, move)

        score = material_score(scratch, color)
        if captured is not None:
            score += weights.capture_multiplier * PIECE_VALUES[captured.piece_type]
        if MoveGenerator(scratch).is_in_check(color.opposite):
            score += weights.check_bonus
        if at_risk:
            score -= weights.risk_multiplier * PIECE_VALUES[piece.piece_type]
        if is_castling_move(piece, move):
            score += weights.castle_bonus
        return score

    def rank_moves(
        self,
        board: Board,
        color: Color,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
    ) -> list[Move]:
        """All candidate moves with ``score`` filled in, best first.

        Promotions are only considered to a queen.
        """
        gen = MoveGenerator(board, castling, en_passant)
        ranked = [
            replace(move, score=self.score_move(board, color, move))
            for move in gen.generate_legal_moves(color)
            if move.promotion in (None, PieceType.QUEEN)
        ]
        ranked.sort(key=lambda m: m.score, reverse=True)
        return ranked

    # -- Selection -----------------------------------------------------------

    def best_move(
        self,
        board: Board,
        color: Color,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
    ) -> Move | None:
        """Highest-scoring move for *color*, or None when there is none."""
        ranked = self.rank_moves(board, color, castling, en_passant)
        if not ranked:
            _LOGGER.debug("No move available for %s", color)
            return None

        top = ranked[0].score
        tied = [m for m in ranked if m.score == top]
        move = tied[0] if len(tied) == 1 else self._rng.choice(tied)
        _LOGGER.debug(
            "Chose %s for %s (score %s, %d tied of %d)",
            move,
            color,
            top,
            len(tied),
            len(ranked),
        )
        return move

    def choose_move(self, position: Position) -> Move | None:
        """:meth:`best_move` for the side to move in *position*."""
        return self.best_move(
            position.board,
            position.side_to_move,
            position.castling,
            position.en_passant,
        )
