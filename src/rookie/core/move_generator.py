"""Pseudo-legal and legal move generation, plus attack detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rookie.core.board import Board
from rookie.core.enums import PROMOTION_TYPES, CastlingRights, Color, PieceType
from rookie.core.move import Move
from rookie.core.piece import Piece
from rookie.core.position import apply_move_to_board
from rookie.core.types import Square

if TYPE_CHECKING:
    from rookie.core.position import Position


# Offsets are (d_row, d_col).
_Offsets = tuple[tuple[int, int], ...]

KNIGHT_OFFSETS: _Offsets = tuple(
    (d_row, d_col)
    for d_row in (-2, -1, 1, 2)
    for d_col in (-2, -1, 1, 2)
    if abs(d_row) != abs(d_col)
)
KING_OFFSETS: _Offsets = tuple(
    (d_row, d_col)
    for d_row in (-1, 0, 1)
    for d_col in (-1, 0, 1)
    if d_row or d_col
)

BISHOP_DIRS: _Offsets = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: _Offsets = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: _Offsets = BISHOP_DIRS + ROOK_DIRS

_SLIDER_DIRS: dict[PieceType, _Offsets] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

# Non-sliding attackers probed outward from the target square.
_STEP_ATTACKERS: tuple[tuple[PieceType, _Offsets], ...] = (
    (PieceType.KNIGHT, KNIGHT_OFFSETS),
    (PieceType.KING, KING_OFFSETS),
)
_RAY_ATTACKERS: tuple[tuple[_Offsets, tuple[PieceType, ...]], ...] = (
    (BISHOP_DIRS, (PieceType.BISHOP, PieceType.QUEEN)),
    (ROOK_DIRS, (PieceType.ROOK, PieceType.QUEEN)),
)


@dataclass(frozen=True, slots=True)
class _CastlePath:
    """Columns involved in one castling move on the mover's home row."""

    rook_col: int
    king_to_col: int
    empty_cols: tuple[int, ...]
    # The king's own square is checked separately.
    safe_cols: tuple[int, ...]


_KINGSIDE = _CastlePath(
    rook_col=7, king_to_col=6, empty_cols=(5, 6), safe_cols=(5, 6)
)
_QUEENSIDE = _CastlePath(
    rook_col=0, king_to_col=2, empty_cols=(1, 2, 3), safe_cols=(3, 2)
)

_CASTLING_PATHS: dict[Color, tuple[tuple[CastlingRights, _CastlePath], ...]] = {
    Color.WHITE: (
        (CastlingRights.WHITE_KINGSIDE, _KINGSIDE),
        (CastlingRights.WHITE_QUEENSIDE, _QUEENSIDE),
    ),
    Color.BLACK: (
        (CastlingRights.BLACK_KINGSIDE, _KINGSIDE),
        (CastlingRights.BLACK_QUEENSIDE, _QUEENSIDE),
    ),
}


class MoveGenerator:
    """Move generation and legality filtering over a :class:`Board`.

    A bare board carries no castling rights or en passant target, so both
    extensions are off unless passed in (or read via :meth:`for_position`).
    Legality is tested on throwaway clones; the wrapped board is never
    mutated.
    """

    __slots__ = ("_board", "_castling", "_en_passant")

    def __init__(
        self,
        board: Board,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
    ) -> None:
        self._board = board
        self._castling = castling
        self._en_passant = en_passant

    @classmethod
    def for_position(cls, position: Position) -> MoveGenerator:
        return cls(position.board, position.castling, position.en_passant)

    @property
    def board(self) -> Board:
        return self._board

    # -- Pseudo-legal moves -------------------------------------------------

    def pseudo_legal_moves(self, from_sq: Square) -> set[Square]:
        """Destinations reachable by the piece on *from_sq*, ignoring check."""
        return set(self._destinations(from_sq))

    def _destinations(self, from_sq: Square) -> list[Square]:
        piece = self._board[from_sq]
        if piece is None:
            return []

        moves: list[Square] = []
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(from_sq, piece.color, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(from_sq, piece.color, KNIGHT_OFFSETS, moves)
        elif pt == PieceType.KING:
            self._gen_steps(from_sq, piece.color, KING_OFFSETS, moves)
            self._gen_castling(from_sq, piece.color, moves)
        else:
            self._gen_sliding(from_sq, piece.color, _SLIDER_DIRS[pt], moves)
        return moves

    # -- Legal moves --------------------------------------------------------

    def legal_moves(self, from_sq: Square) -> set[Square]:
        """Pseudo-legal destinations that keep the mover's king safe."""
        return set(self._legal_destinations(from_sq))

    def has_any_legal_move(self, color: Color) -> bool:
        for sq, _piece in self._board.pieces(color):
            for to_sq in self._destinations(sq):
                if not self._leaves_king_in_check(color, Move(sq, to_sq)):
                    return True
        return False

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*; promotions expand to each kind."""
        moves: list[Move] = []
        for sq, piece in self._board.pieces(color):
            for to_sq in self._legal_destinations(sq):
                if (
                    piece.piece_type == PieceType.PAWN
                    and to_sq.row == color.promotion_row
                ):
                    for pt in PROMOTION_TYPES:
                        moves.append(Move(sq, to_sq, pt))
                else:
                    moves.append(Move(sq, to_sq))
        return moves

    def _legal_destinations(self, from_sq: Square) -> list[Square]:
        piece = self._board[from_sq]
        if piece is None:
            return []
        return [
            to_sq
            for to_sq in self._destinations(from_sq)
            if not self._leaves_king_in_check(piece.color, Move(from_sq, to_sq))
        ]

    def _leaves_king_in_check(self, color: Color, move: Move) -> bool:
        scratch = self._board.clone()
        apply_move_to_board(scratch, move)
        return MoveGenerator(scratch).is_in_check(color)

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? ``False`` when the king is missing."""
        king_sq = self._board.find_king(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?

        Works backwards from *sq* per piece type, so the probed square does
        not need to hold anything for a pawn diagonal to count.
        """
        board = self._board

        pawn = Piece(by_color, PieceType.PAWN)
        behind = -by_color.pawn_direction
        for d_col in (-1, 1):
            src = sq.offset(behind, d_col)
            if src is not None and board[src] == pawn:
                return True

        for piece_type, offsets in _STEP_ATTACKERS:
            attacker = Piece(by_color, piece_type)
            for d_row, d_col in offsets:
                src = sq.offset(d_row, d_col)
                if src is not None and board[src] == attacker:
                    return True

        return any(
            self._ray_attacked(sq, by_color, directions, attackers)
            for directions, attackers in _RAY_ATTACKERS
        )

    def _ray_attacked(
        self,
        sq: Square,
        by_color: Color,
        directions: _Offsets,
        attackers: tuple[PieceType, ...],
    ) -> bool:
        board = self._board
        for d_row, d_col in directions:
            src = sq.offset(d_row, d_col)
            while src is not None:
                piece = board[src]
                if piece is not None:
                    if piece.color == by_color and piece.piece_type in attackers:
                        return True
                    break
                src = src.offset(d_row, d_col)
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        step = color.pawn_direction

        one_step = sq.offset(step, 0)
        if one_step is not None and board.is_empty(one_step):
            moves.append(one_step)
            if sq.row == color.pawn_start_row:
                two_step = sq.offset(2 * step, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(two_step)

        for d_col in (-1, 1):
            cap_sq = sq.offset(step, d_col)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.append(cap_sq)
            elif cap_sq == self._en_passant and board[
                Square(sq.row, cap_sq.col)
            ] == Piece(color.opposite, PieceType.PAWN):
                moves.append(cap_sq)

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        offsets: _Offsets,
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in offsets:
            to_sq = sq.offset(d_row, d_col)
            if to_sq is None:
                continue
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        directions: _Offsets,
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in directions:
            to_sq = sq.offset(d_row, d_col)
            while to_sq is not None:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    to_sq = to_sq.offset(d_row, d_col)
                    continue
                if target.color != color:
                    moves.append(to_sq)
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Square]) -> None:
        home = color.home_row
        paths = [
            path for right, path in _CASTLING_PATHS[color] if self._castling & right
        ]
        if not paths or king_sq != Square(home, 4):
            return

        # Castling out of check is never allowed.
        opponent = color.opposite
        if self.is_square_attacked(king_sq, opponent):
            return

        board = self._board
        rook = Piece(color, PieceType.ROOK)
        for path in paths:
            if board[Square(home, path.rook_col)] != rook:
                continue
            if any(not board.is_empty(Square(home, col)) for col in path.empty_cols):
                continue
            if any(
                self.is_square_attacked(Square(home, col), opponent)
                for col in path.safe_cols
            ):
                continue
            moves.append(Square(home, path.king_to_col))
