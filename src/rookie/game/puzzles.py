"""Tactical puzzles: a preset position plus a single expected move."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum, auto

from rookie.core.enums import PieceType
from rookie.core.errors import IllegalMove
from rookie.core.move import Move
from rookie.core.types import (
    B3,
    B7,
    B8,
    C3,
    D4,
    D5,
    D6,
    D8,
    E1,
    E5,
    E7,
    G1,
    G6,
    G8,
    Square,
)
from rookie.game.state import AppliedMove, GameState, RuleSet

_LOGGER = logging.getLogger(__name__)


class PuzzleStatus(IntEnum):
    SOLVING = auto()
    CORRECT = auto()
    INCORRECT = auto()


@dataclass(frozen=True, slots=True)
class Puzzle:
    """A preset position and the one move that solves it.

    Solutions are stored as row/column squares; only the ``(from, to)``
    pair is compared.
    """

    id: int
    name: str
    category: str
    difficulty: str
    fen: str
    solution: Move
    hint: str = ""
    description: str = ""

    def is_solution(self, from_sq: Square, to_sq: Square) -> bool:
        return (from_sq, to_sq) == self.solution.squares


PUZZLES: tuple[Puzzle, ...] = (
    Puzzle(
        id=1,
        name="Back Rank Mate",
        category="checkmate",
        difficulty="beginner",
        fen="3r2k1/5ppp/8/8/3Q4/8/5PPP/6K1 w - - 0 1",
        solution=Move(D4, D8),
        hint="Look for a back rank checkmate!",
        description="White to move - Mate in 1",
    ),
    Puzzle(
        id=2,
        name="Queen and King Mate",
        category="checkmate",
        difficulty="beginner",
        fen="7k/8/5K2/8/8/1Q6/8/8 w - - 0 1",
        solution=Move(B3, G8),
        hint="Drive the king to the edge and deliver mate!",
        description="White to move - Mate in 1",
    ),
    Puzzle(
        id=3,
        name="Smothered Mate",
        category="checkmate",
        difficulty="intermediate",
        fen="5rk1/5ppp/6N1/8/8/8/8/6K1 w - - 0 1",
        solution=Move(G6, E7),
        hint="The knight can deliver a special mate when the king is trapped by its own pieces!",
        description="White to move - Mate in 1",
    ),
    Puzzle(
        id=4,
        name="Fork Attack",
        category="tactics",
        difficulty="beginner",
        fen="r2r2k1/ppp2ppp/8/4p3/4P3/2N5/PPP2PPP/R4RK1 w - - 0 1",
        solution=Move(C3, D5),
        hint="Knights are great at attacking two pieces at once!",
        description="White to move - Win material",
    ),
    Puzzle(
        id=5,
        name="Castling Defense",
        category="tactics",
        difficulty="beginner",
        fen="r3k2r/ppp2ppp/8/3pp3/3PP3/8/PPP2PPP/R3K2R w KQkq - 0 1",
        solution=Move(E1, G1),
        hint="Castle to safety!",
        description="White to move - Castle kingside",
    ),
    Puzzle(
        id=6,
        name="En Passant Capture",
        category="tactics",
        difficulty="intermediate",
        fen="rnbqkbnr/ppp2ppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3",
        solution=Move(E5, D6),
        hint="Capture the pawn that just moved two squares!",
        description="White to move - En passant",
    ),
    Puzzle(
        id=7,
        name="Pawn Promotion",
        category="endgame",
        difficulty="beginner",
        fen="8/1P4k1/8/8/8/5K2/8/8 w - - 0 1",
        solution=Move(B7, B8, PieceType.QUEEN),
        hint="Push the pawn to promote!",
        description="White to move - Promote and win",
    ),
)


class PuzzleSession:
    """Plays one puzzle: checks attempts against the expected move.

    A correct attempt is applied to the board. A legal but wrong attempt
    leaves the board untouched, counts as a failed attempt and waits for
    :meth:`retry`.
    """

    __slots__ = ("_puzzle", "_rules", "_state", "_status", "_attempts")

    def __init__(self, puzzle: Puzzle, rules: RuleSet | None = None) -> None:
        self._puzzle = puzzle
        self._rules = rules or RuleSet.standard()
        self._state = GameState(self._rules)
        self._status = PuzzleStatus.SOLVING
        self._attempts = 0
        self.reset()

    @property
    def puzzle(self) -> Puzzle:
        return self._puzzle

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def status(self) -> PuzzleStatus:
        return self._status

    @property
    def attempts(self) -> int:
        """Number of failed attempts since the last reset."""
        return self._attempts

    def attempt(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> AppliedMove | None:
        """Try a move. Returns the applied move when it solves the puzzle.

        Raises :class:`IllegalMove` for moves that are not legal here, or
        when the session is not waiting for an attempt.
        """
        if self._status != PuzzleStatus.SOLVING:
            raise IllegalMove(f"Puzzle is {self._status.name.lower()}, not solving")
        if to_sq not in self._state.legal_moves_from(from_sq):
            raise IllegalMove(f"Illegal move {from_sq}{to_sq}")

        if not self._puzzle.is_solution(from_sq, to_sq):
            self._status = PuzzleStatus.INCORRECT
            self._attempts += 1
            _LOGGER.debug(
                "Puzzle %d: wrong attempt %s%s (%d so far)",
                self._puzzle.id,
                from_sq,
                to_sq,
                self._attempts,
            )
            return None

        record = self._state.apply_move(
            from_sq, to_sq, promotion or self._puzzle.solution.promotion
        )
        self._status = PuzzleStatus.CORRECT
        return record

    def retry(self) -> None:
        """Go back to solving after a wrong attempt."""
        if self._status == PuzzleStatus.INCORRECT:
            self._status = PuzzleStatus.SOLVING

    def reset(self) -> None:
        """Reload the puzzle position and clear the attempt counter."""
        self._state.setup(self._puzzle.fen, rules=self._rules)
        self._status = PuzzleStatus.SOLVING
        self._attempts = 0


def next_puzzle(puzzle: Puzzle, catalog: tuple[Puzzle, ...] = PUZZLES) -> Puzzle:
    """The puzzle after *puzzle* in *catalog*, wrapping around at the end."""
    index = catalog.index(puzzle)
    return catalog[(index + 1) % len(catalog)]
