"""Tests for Position make/unmake and bookkeeping."""

import pytest

from rookie.core.enums import CastlingRights, Color, PieceType
from rookie.core.move import Move
from rookie.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from rookie.core.piece import Piece
from rookie.core.position import Position, apply_move_to_board
from rookie.core.types import parse_square


def _mv(uci: str) -> Move:
    promo = None
    if len(uci) == 5:
        promo = {"q": PieceType.QUEEN, "n": PieceType.KNIGHT}[uci[4]]
    return Move(parse_square(uci[:2]), parse_square(uci[2:4]), promo)


class TestMakeUnmake:
    def test_make_and_unmake_restores_fen(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        board = pos.board
        pos.make_move(_mv("e2e4"))
        assert pos.side_to_move == Color.BLACK
        pos.unmake_move()
        assert position_to_fen(pos) == STARTING_FEN
        assert pos.board is board

    def test_unmake_without_history_raises(self) -> None:
        with pytest.raises(ValueError, match="No move to undo"):
            Position().unmake_move()

    def test_make_on_empty_square_raises(self) -> None:
        with pytest.raises(ValueError):
            Position().make_move(_mv("e4e5"))

    def test_capture_returns_piece(self) -> None:
        pos = position_from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        captured = pos.make_move(_mv("e4d5"))
        assert captured == Piece(Color.BLACK, PieceType.PAWN)
        assert pos.halfmove_clock == 0

    def test_clocks(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        pos.make_move(_mv("g1f3"))
        assert pos.halfmove_clock == 1
        assert pos.fullmove_number == 1
        pos.make_move(_mv("g8f6"))
        assert pos.halfmove_clock == 2
        assert pos.fullmove_number == 2
        pos.make_move(_mv("e2e4"))
        assert pos.halfmove_clock == 0
        assert pos.ply == 3


class TestEnPassant:
    def test_double_push_sets_target(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        pos.make_move(_mv("e2e4"))
        assert pos.en_passant == parse_square("e3")
        pos.make_move(_mv("g8f6"))
        assert pos.en_passant is None

    def test_disabled_never_sets_target(self) -> None:
        pos = Position(en_passant_enabled=False)
        pos.make_move(_mv("e2e4"))
        assert pos.en_passant is None

    def test_en_passant_capture_removes_bypassed_pawn(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
        captured = pos.make_move(_mv("e5d6"))
        assert captured == Piece(Color.BLACK, PieceType.PAWN)
        assert pos.board[parse_square("d5")] is None
        assert pos.board[parse_square("d6")] == Piece(Color.WHITE, PieceType.PAWN)
        pos.unmake_move()
        assert pos.board[parse_square("d5")] == Piece(Color.BLACK, PieceType.PAWN)
        assert pos.en_passant == parse_square("d6")


class TestCastling:
    def test_kingside_castle_moves_rook(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        pos.make_move(_mv("e1g1"))
        assert pos.board[parse_square("g1")] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[parse_square("f1")] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[parse_square("h1")] is None
        assert not pos.castling & CastlingRights.WHITE_BOTH
        assert pos.castling & CastlingRights.BLACK_BOTH == CastlingRights.BLACK_BOTH

    def test_queenside_castle_moves_rook(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        pos.make_move(_mv("e8c8"))
        assert pos.board[parse_square("d8")] == Piece(Color.BLACK, PieceType.ROOK)
        assert pos.board[parse_square("a8")] is None

    def test_rook_move_drops_one_side(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        pos.make_move(_mv("h1h2"))
        assert not pos.castling & CastlingRights.WHITE_KINGSIDE
        assert pos.castling & CastlingRights.WHITE_QUEENSIDE

    def test_capturing_rook_drops_opponent_right(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        pos.make_move(_mv("a1a8"))
        assert not pos.castling & CastlingRights.BLACK_QUEENSIDE
        assert not pos.castling & CastlingRights.WHITE_QUEENSIDE


class TestPromotion:
    def test_default_promotion_is_queen(self) -> None:
        pos = position_from_fen("7k/4P3/8/8/8/8/8/K7 w - - 0 1")
        pos.make_move(_mv("e7e8"))
        assert pos.board[parse_square("e8")] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_under_promotion(self) -> None:
        pos = position_from_fen("7k/4P3/8/8/8/8/8/K7 w - - 0 1")
        pos.make_move(_mv("e7e8n"))
        assert pos.board[parse_square("e8")] == Piece(Color.WHITE, PieceType.KNIGHT)


class TestApplyMoveToBoard:
    def test_does_not_touch_other_boards(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        scratch = pos.board.clone()
        apply_move_to_board(scratch, _mv("e2e4"))
        assert pos.board[parse_square("e2")] is not None
        assert scratch[parse_square("e4")] == Piece(Color.WHITE, PieceType.PAWN)


class TestRepetition:
    def test_repetition_count(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.repetition_count() == 1
        for uci in ("g1f3", "g8f6", "f3g1", "f6g8"):
            pos.make_move(_mv(uci))
        assert pos.repetition_count() == 2
        pos.unmake_move()
        assert pos.repetition_count() == 1

    def test_copy_keeps_counts(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        for uci in ("g1f3", "g8f6", "f3g1", "f6g8"):
            pos.make_move(_mv(uci))
        clone = pos.copy()
        assert clone.repetition_count() == 2
        assert clone.board == pos.board
        assert clone.board is not pos.board
        assert clone.ply == 0
