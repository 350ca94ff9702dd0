"""Game position: the board plus side to move, castling, en passant and clocks."""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable
from dataclasses import dataclass

from rookie.core.board import Board
from rookie.core.enums import CastlingRights, Color, PieceType
from rookie.core.move import Move
from rookie.core.piece import Piece
from rookie.core.types import ALL_SQUARES, Square


def is_castling_move(piece: Piece, move: Move) -> bool:
    """A king stepping two columns sideways is a castling move."""
    return (
        piece.piece_type == PieceType.KING
        and move.from_sq.row == move.to_sq.row
        and abs(move.to_sq.col - move.from_sq.col) == 2
    )


def is_en_passant_move(board: Board, piece: Piece, move: Move) -> bool:
    """A pawn moving diagonally onto an empty square captures en passant."""
    return (
        piece.piece_type == PieceType.PAWN
        and move.from_sq.col != move.to_sq.col
        and board[move.to_sq] is None
    )


def castling_rook_squares(king_from: Square, king_to: Square) -> tuple[Square, Square]:
    """``(rook_from, rook_to)`` for the castling move ``king_from -> king_to``."""
    row = king_from.row
    if king_to.col > king_from.col:
        return Square(row, 7), Square(row, 5)
    return Square(row, 0), Square(row, 3)


def apply_move_to_board(board: Board, move: Move) -> Piece | None:
    """Play *move* on *board* in place and return the captured piece.

    Handles the en passant capture, the castling rook slide and promotion
    (defaulting to a queen). No legality checking is performed.
    """
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {move.from_sq}")

    captured = board[move.to_sq]
    if is_en_passant_move(board, piece, move):
        bypassed = Square(move.from_sq.row, move.to_sq.col)
        captured = board[bypassed]
        board[bypassed] = None
    elif is_castling_move(piece, move):
        rook_from, rook_to = castling_rook_squares(move.from_sq, move.to_sq)
        board[rook_to] = board[rook_from]
        board[rook_from] = None

    placed = piece
    if (
        piece.piece_type == PieceType.PAWN
        and move.to_sq.row == piece.color.promotion_row
    ):
        placed = Piece(piece.color, move.promotion or PieceType.QUEEN)

    board[move.from_sq] = None
    board[move.to_sq] = placed
    return captured


@dataclass(slots=True)
class _PositionState:
    """Snapshot saved before each move so we can undo it."""

    board: Board
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    fullmove_number: int


_ROOK_CORNERS: dict[Square, CastlingRights] = {
    Square(7, 0): CastlingRights.WHITE_QUEENSIDE,
    Square(7, 7): CastlingRights.WHITE_KINGSIDE,
    Square(0, 0): CastlingRights.BLACK_QUEENSIDE,
    Square(0, 7): CastlingRights.BLACK_KINGSIDE,
}


class Position:
    """Full game position with :meth:`make_move` / :meth:`unmake_move`.

    Undo information is kept on an internal history stack; the board itself
    is snapshotted by value since it is small and fixed-size. With
    ``en_passant_enabled`` off, double pawn pushes never create a target.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "en_passant_enabled",
        "_history",
        "_key_stack",
        "_key_counts",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
        en_passant_enabled: bool = True,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self.en_passant_enabled = en_passant_enabled
        self._history: list[_PositionState] = []
        key = self.key()
        self._key_stack: list[Hashable] = [key]
        self._key_counts: Counter[Hashable] = Counter([key])

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> Piece | None:
        """Apply *move* (assumed legal) and return the captured piece."""
        mover = self.board[move.from_sq]
        if mover is None:
            raise ValueError(f"No piece on {move.from_sq}")

        self._history.append(self._snapshot())
        captured = apply_move_to_board(self.board, move)
        is_pawn = mover.piece_type == PieceType.PAWN

        self.en_passant = self._double_push_target(move) if is_pawn else None
        self._update_castling(move, mover)
        reset_clock = is_pawn or captured is not None
        self.halfmove_clock = 0 if reset_clock else self.halfmove_clock + 1
        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite

        key = self.key()
        self._key_stack.append(key)
        self._key_counts[key] += 1
        return captured

    def unmake_move(self) -> None:
        """Undo the last :meth:`make_move`."""
        if not self._history:
            raise ValueError("No move to undo")
        saved = self._history.pop()

        key = self._key_stack.pop()
        self._key_counts[key] -= 1
        if not self._key_counts[key]:
            del self._key_counts[key]

        # Restore in place so callers holding ``self.board`` stay valid.
        for sq in ALL_SQUARES:
            self.board[sq] = saved.board[sq]
        self.side_to_move = self.side_to_move.opposite
        self.castling = saved.castling
        self.en_passant = saved.en_passant
        self.halfmove_clock = saved.halfmove_clock
        self.fullmove_number = saved.fullmove_number

    def _snapshot(self) -> _PositionState:
        return _PositionState(
            self.board.clone(),
            self.castling,
            self.en_passant,
            self.halfmove_clock,
            self.fullmove_number,
        )

    def _double_push_target(self, move: Move) -> Square | None:
        if not self.en_passant_enabled:
            return None
        if abs(move.to_sq.row - move.from_sq.row) != 2:
            return None
        return Square((move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col)

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if piece.piece_type == PieceType.KING:
            self.castling &= ~(
                CastlingRights.WHITE_BOTH
                if piece.color == Color.WHITE
                else CastlingRights.BLACK_BOTH
            )
        # Anything leaving or landing on a rook corner kills that right.
        for corner in (move.from_sq, move.to_sq):
            self.castling &= ~_ROOK_CORNERS.get(corner, CastlingRights.NONE)

    # ── Utilities ────────────────────────────────────────────────────────

    def key(self) -> Hashable:
        """Identity of the position for repetition counting."""
        return (self.board.key(), self.side_to_move, self.castling, self.en_passant)

    def copy(self) -> Position:
        """Deep copy that keeps repetition counts but not the undo stack."""
        twin = Position(
            self.board.clone(),
            self.side_to_move,
            self.castling,
            self.en_passant,
            self.halfmove_clock,
            self.fullmove_number,
            en_passant_enabled=self.en_passant_enabled,
        )
        twin._key_stack = list(self._key_stack)
        twin._key_counts = Counter(self._key_counts)
        return twin

    def repetition_count(self) -> int:
        """How many times the current position occurred in game history."""
        return self._key_counts[self._key_stack[-1]]

    @property
    def ply(self) -> int:
        """Number of moves made since this object was created."""
        return len(self._history)
