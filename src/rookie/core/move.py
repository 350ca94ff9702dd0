"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field

from rookie.core.enums import PieceType
from rookie.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A request to move the piece on *from_sq* to *to_sq*.

    ``score`` is filled in by the evaluator and takes no part in equality,
    so a scored move still compares equal to the plain request.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None
    score: float | None = field(default=None, compare=False)

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += self.promotion.letter
        return base

    @property
    def squares(self) -> tuple[Square, Square]:
        """The ``(from, to)`` pair, as used for puzzle solution matching."""
        return (self.from_sq, self.to_sq)
