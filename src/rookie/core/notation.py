"""Move notation, literal board layouts and FEN parsing/serialization."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import groupby

from rookie.core.board import Board
from rookie.core.enums import CastlingRights, Color, PieceType
from rookie.core.piece import Piece
from rookie.core.position import Position
from rookie.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_EMPTY_CELL = "."

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


# ── Move notation ────────────────────────────────────────────────────────────


def move_notation(
    piece_type: PieceType, to_sq: Square, captured: Piece | None = None
) -> str:
    """Short history notation: piece letter, ``x`` on capture, target square.

    >>> move_notation(PieceType.PAWN, parse_square("e4"), Piece.from_char("p"))
    'pxe4'
    """
    capture = "x" if captured is not None else ""
    return f"{piece_type.letter}{capture}{square_name(to_sq)}"


# ── Literal layouts ──────────────────────────────────────────────────────────


def board_from_layout(rows: Sequence[str]) -> Board:
    """Build a board from 8 strings of 8 cells, row 0 (rank 8) first.

    ``.`` marks an empty cell, FEN letters mark pieces::

        board_from_layout([
            "....k...",
            "........",
            ...
            "....K...",
        ])
    """
    if len(rows) != 8:
        raise ValueError(f"Layout must have 8 rows, got {len(rows)}")
    board = Board()
    for row_idx, text in enumerate(rows):
        if len(text) != 8:
            raise ValueError(f"Layout row {row_idx} must have 8 cells: {text!r}")
        for col_idx, ch in enumerate(text):
            if ch != _EMPTY_CELL:
                board[Square(row_idx, col_idx)] = Piece.from_char(ch)
    return board


def board_to_layout(board: Board) -> list[str]:
    """Inverse of :func:`board_from_layout`."""
    rows: list[str] = []
    for row_idx in range(8):
        cells = []
        for col_idx in range(8):
            piece = board[Square(row_idx, col_idx)]
            cells.append(str(piece) if piece is not None else _EMPTY_CELL)
        rows.append("".join(cells))
    return rows


# ── FEN ──────────────────────────────────────────────────────────────────────


def _parse_placement(field: str) -> Board:
    # FEN lists rank 8 first, which is row 0.
    ranks = field.split("/")
    if len(ranks) != 8:
        raise ValueError(f"FEN placement needs 8 ranks, got {len(ranks)}")

    board = Board()
    for row, rank in enumerate(ranks):
        col = 0
        for ch in rank:
            if ch in "12345678":
                col += int(ch)
            elif col < 8:
                board[Square(row, col)] = Piece.from_char(ch)
                col += 1
            else:
                col = 9
                break
        if col != 8:
            raise ValueError(f"FEN rank {8 - row} does not cover 8 files: {rank!r}")
    return board


def _parse_side(field: str) -> Color:
    sides = {"w": Color.WHITE, "b": Color.BLACK}
    if field not in sides:
        raise ValueError(f"Invalid FEN side-to-move field: {field!r}")
    return sides[field]


def _parse_castling(field: str) -> CastlingRights:
    if field == "-":
        return CastlingRights.NONE
    if len(set(field)) != len(field) or not set(field) <= _CASTLING_CHARS.keys():
        raise ValueError(f"Invalid FEN castling field: {field!r}")
    rights = CastlingRights.NONE
    for ch in field:
        rights |= _CASTLING_CHARS[ch]
    return rights


def _parse_en_passant(field: str, side: Color) -> Square | None:
    if field == "-":
        return None
    target = parse_square(field)
    # The target sits behind a pawn the opponent just pushed two squares.
    if target.row != (2 if side == Color.WHITE else 5):
        raise ValueError(f"En passant square {field!r} impossible for {side}")
    return target


def _parse_counter(parts: list[str], index: int, default: int, minimum: int) -> int:
    if len(parts) <= index:
        return default
    value = int(parts[index])
    if value < minimum:
        raise ValueError(f"FEN counter out of range: {parts[index]!r}")
    return value


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The two move counters are optional and default to ``0 1``. Anything
    malformed raises :class:`ValueError`.
    """
    parts = fen.split()
    if not 4 <= len(parts) <= 6:
        raise ValueError(f"FEN needs 4 to 6 fields: {fen!r}")

    side = _parse_side(parts[1])
    return Position(
        _parse_placement(parts[0]),
        side,
        _parse_castling(parts[2]),
        _parse_en_passant(parts[3], side),
        _parse_counter(parts, 4, default=0, minimum=0),
        _parse_counter(parts, 5, default=1, minimum=1),
    )


def _compress_row(cells: str) -> str:
    """``"..p....."`` becomes ``"2p5"``."""
    return "".join(
        str(len(list(run))) if ch == _EMPTY_CELL else "".join(run)
        for ch, run in groupby(cells)
    )


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    placement = "/".join(_compress_row(row) for row in board_to_layout(pos.board))
    side = "w" if pos.side_to_move == Color.WHITE else "b"
    castling = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    ep = square_name(pos.en_passant) if pos.en_passant is not None else "-"
    return (
        f"{placement} {side} {castling or '-'} {ep} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
