"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from rookie.core.enums import Color, PieceType
from rookie.core.piece import Piece
from rookie.core.types import ALL_SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces.

    Pure data: no rule knowledge lives here. Coordinates outside ``[0, 7]``
    raise :class:`IndexError`; callers are expected to validate them first.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    @staticmethod
    def _check(sq: Square) -> None:
        if not (0 <= sq.row < 8 and 0 <= sq.col < 8):
            raise IndexError(f"Square off the board: ({sq.row}, {sq.col})")

    # -- Element access -----------------------------------------------------

    def get(self, sq: Square) -> Piece | None:
        self._check(sq)
        return self._grid[sq.row][sq.col]

    def set(self, sq: Square, piece: Piece | None) -> None:
        self._check(sq)
        self._grid[sq.row][sq.col] = piece

    __getitem__ = get
    __setitem__ = set

    def is_empty(self, sq: Square) -> bool:
        return self.get(sq) is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[tuple[Square, Piece]]:
        """Occupied squares in row-major order, optionally for one *color*."""
        found: list[tuple[Square, Piece]] = []
        for sq in ALL_SQUARES:
            piece = self._grid[sq.row][sq.col]
            if piece is None:
                continue
            if color is None or piece.color == color:
                found.append((sq, piece))
        return found

    def find_king(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` on a king-less board."""
        for sq, piece in self.pieces(color):
            if piece.piece_type == PieceType.KING:
                return sq
        return None

    def key(self) -> tuple[Piece | None, ...]:
        """Hashable snapshot of the placement."""
        return tuple(cell for row in self._grid for cell in row)

    # -- Mutation / copying -------------------------------------------------

    def clone(self) -> Board:
        """Independent copy, safe to mutate speculatively."""
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (black on rows 0-1, white on rows 6-7)."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b._grid[0][col] = Piece(Color.BLACK, pt)
            b._grid[1][col] = Piece(Color.BLACK, PieceType.PAWN)
            b._grid[6][col] = Piece(Color.WHITE, PieceType.PAWN)
            b._grid[7][col] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row_idx, row in enumerate(self._grid):
            cells = [str(p) if p else "." for p in row]
            rows.append(f"{8 - row_idx} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
