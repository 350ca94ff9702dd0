"""Tests for the one-ply move evaluator."""

import random

import pytest

from rookie.core.board import Board
from rookie.core.enums import CastlingRights, Color, PieceType
from rookie.core.move import Move
from rookie.core.notation import STARTING_FEN, board_from_layout, position_from_fen
from rookie.core.types import A3, A4, A5, B5, C7, D1, D5, E1, E7, F1, G1, Square
from rookie.engine.evaluator import (
    PIECE_VALUES,
    EvaluationWeights,
    MoveEvaluator,
    material_score,
)

# Black king e8 and queen a6; the b5 knight can fork them from c7.
FORK_LAYOUT = [
    "....k...",
    "........",
    "q.......",
    ".N......",
    "........",
    "........",
    "........",
    ".......K",
]


class TestMaterial:
    def test_piece_values(self) -> None:
        assert PIECE_VALUES[PieceType.PAWN] == 1
        assert PIECE_VALUES[PieceType.QUEEN] == 9
        assert PIECE_VALUES[PieceType.KING] == 100

    def test_starting_position_balanced(self) -> None:
        assert material_score(Board.initial(), Color.WHITE) == 0

    def test_material_is_relative_to_color(self) -> None:
        board = board_from_layout(FORK_LAYOUT)
        assert material_score(board, Color.WHITE) == -6
        assert material_score(board, Color.BLACK) == 6


class TestScoreMove:
    def test_capture_of_defended_pawn(self) -> None:
        board = board_from_layout([
            ".......k",
            "........",
            "....p...",
            "...p....",
            "........",
            "........",
            "........",
            "...Q...K",
        ])
        # material +8, capture +10, destination defended by e6: -5 * 9
        assert MoveEvaluator().score_move(board, Color.WHITE, Move(D1, D5)) == -27

    def test_risk_uses_board_before_the_move(self) -> None:
        board = board_from_layout([
            "r...k...",
            "........",
            "........",
            "........",
            "R.......",
            "........",
            "........",
            "....K...",
        ])
        evaluator = MoveEvaluator()
        # a3 is only shielded by the moving rook itself, so no penalty
        assert evaluator.score_move(board, Color.WHITE, Move(A4, A3)) == 0
        assert evaluator.score_move(board, Color.WHITE, Move(A4, A5)) == -25

    def test_castle_bonus(self) -> None:
        board = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1").board
        evaluator = MoveEvaluator()
        assert evaluator.score_move(board, Color.WHITE, Move(E1, G1)) == 30
        assert evaluator.score_move(board, Color.WHITE, Move(E1, F1)) == 0

    def test_custom_weights(self) -> None:
        board = board_from_layout(FORK_LAYOUT)
        evaluator = MoveEvaluator(EvaluationWeights(check_bonus=0))
        assert evaluator.weights.check_bonus == 0
        assert evaluator.score_move(board, Color.WHITE, Move(B5, C7)) == -6

    def test_board_is_not_mutated(self) -> None:
        board = board_from_layout(FORK_LAYOUT)
        before = board.clone()
        MoveEvaluator().score_move(board, Color.WHITE, Move(B5, C7))
        assert board == before

    def test_empty_origin_raises(self) -> None:
        with pytest.raises(ValueError):
            MoveEvaluator().score_move(Board(), Color.WHITE, Move(A4, A5))


class TestBestMove:
    def test_knight_fork(self) -> None:
        board = board_from_layout(FORK_LAYOUT)
        move = MoveEvaluator(rng=random.Random(0)).best_move(board, Color.WHITE)
        assert move is not None
        assert move.squares == (B5, C7)
        assert move.score == 44

    def test_rank_moves_sorted_with_scores(self) -> None:
        board = board_from_layout(FORK_LAYOUT)
        ranked = MoveEvaluator().rank_moves(board, Color.WHITE)
        scores = [m.score for m in ranked]
        assert scores == sorted(scores, reverse=True)
        assert ranked[1].squares == (B5, Square(2, 3))
        assert ranked[1].score == 29

    def test_only_queen_promotions(self) -> None:
        board = board_from_layout([
            "......k.",
            "....P...",
            "........",
            "........",
            "........",
            "........",
            "........",
            "K.......",
        ])
        ranked = MoveEvaluator().rank_moves(board, Color.WHITE)
        promos = [m.promotion for m in ranked if m.from_sq == E7]
        assert promos == [PieceType.QUEEN]

    def test_no_moves_returns_none(self) -> None:
        board = board_from_layout([
            ".......k",
            "........",
            ".....KQ.",
            "........",
            "........",
            "........",
            "........",
            "........",
        ])
        assert MoveEvaluator().best_move(board, Color.BLACK) is None

    def test_ties_broken_by_rng(self) -> None:
        board = board_from_layout([
            ".......k",
            "........",
            "........",
            "........",
            "........",
            "........",
            "........",
            "K.......",
        ])
        picks = {
            MoveEvaluator(rng=random.Random(seed)).best_move(board, Color.WHITE)
            for seed in range(50)
        }
        assert {m.to_sq for m in picks if m is not None} == {
            Square(6, 0),
            Square(6, 1),
            Square(7, 1),
        }

    def test_same_seed_same_choice(self) -> None:
        board = Board.initial()
        first = MoveEvaluator(rng=random.Random(42)).best_move(board, Color.WHITE)
        second = MoveEvaluator(rng=random.Random(42)).best_move(board, Color.WHITE)
        assert first == second

    def test_choose_move_uses_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        pos.make_move(Move(Square(6, 4), Square(4, 4)))
        move = MoveEvaluator(rng=random.Random(3)).choose_move(pos)
        assert move is not None
        piece = pos.board[move.from_sq]
        assert piece is not None and piece.color == Color.BLACK

    def test_castling_needs_rights(self) -> None:
        board = position_from_fen("r3k2r/p6p/8/8/8/8/P6P/R3K2R w KQkq - 0 1").board
        evaluator = MoveEvaluator()
        with_rights = evaluator.best_move(
            board, Color.WHITE, CastlingRights.WHITE_KINGSIDE
        )
        assert with_rights is not None
        assert with_rights.squares == (E1, G1)
        without = evaluator.rank_moves(board, Color.WHITE)
        assert all(m.squares != (E1, G1) for m in without)

    def test_hanging_rook_detected(self) -> None:
        board = board_from_layout([
            "r...k...",
            "........",
            "........",
            "........",
            "R.......",
            "........",
            "........",
            "....K...",
        ])
        move = MoveEvaluator().best_move(board, Color.WHITE)
        assert move is not None
        # Rxa8+ wins the rook with check
        assert move.to_sq == Square(0, 0)
        assert move.score == 105
