"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from rookie.core.enums import Color, PieceType

# Unicode glyphs run king..pawn; black glyphs follow the white ones.
_WHITE_KING_GLYPH = 0x2654
_GLYPH_ORDER: tuple[PieceType, ...] = (
    PieceType.KING,
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.PAWN,
)


def _fen_char(color: Color, piece_type: PieceType) -> str:
    letter = piece_type.letter
    return letter.upper() if color == Color.WHITE else letter


_BY_FEN_CHAR: dict[str, tuple[Color, PieceType]] = {
    _fen_char(color, pt): (color, pt) for color in Color for pt in PieceType
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable (color, kind) pair occupying a board cell."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN letter: uppercase for white, lowercase for black."""
        return _fen_char(self.color, self.piece_type)

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Build a piece from its FEN letter, e.g. ``'N'`` is a white knight."""
        found = _BY_FEN_CHAR.get(char)
        if found is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(*found)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol for renderers, e.g. ♞."""
        offset = _GLYPH_ORDER.index(self.piece_type)
        if self.color == Color.BLACK:
            offset += len(_GLYPH_ORDER)
        return chr(_WHITE_KING_GLYPH + offset)
