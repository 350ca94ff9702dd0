"""Game state machine: turn tracking, terminal detection and move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rookie.core.board import Board
from rookie.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    DrawReason,
    GameStatus,
    PieceType,
)
from rookie.core.errors import GameOverError, IllegalMove
from rookie.core.move import Move
from rookie.core.move_generator import MoveGenerator
from rookie.core.notation import STARTING_FEN, move_notation, position_from_fen
from rookie.core.piece import Piece
from rookie.core.position import Position, is_castling_move, is_en_passant_move
from rookie.core.rules import Rules
from rookie.core.types import Square
from rookie.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Which rule extensions are active on top of the minimal core.

    The minimal core knows piece geometry, check, checkmate, stalemate and
    queen-by-default promotion. Everything toggled here is layered on top.
    """

    castling: bool = True
    en_passant: bool = True
    fifty_move_rule: bool = True
    threefold_repetition: bool = True
    insufficient_material: bool = True

    @classmethod
    def standard(cls) -> RuleSet:
        return cls()

    @classmethod
    def minimal(cls) -> RuleSet:
        return cls(
            castling=False,
            en_passant=False,
            fifty_move_rule=False,
            threefold_repetition=False,
            insufficient_material=False,
        )


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of the game so far."""

    status: GameStatus
    side_to_move: Color | None = None
    winner: Color | None = None
    draw_reason: DrawReason | None = None

    @classmethod
    def in_progress(cls, side_to_move: Color) -> Outcome:
        return cls(GameStatus.IN_PROGRESS, side_to_move=side_to_move)

    @classmethod
    def checkmate(cls, winner: Color) -> Outcome:
        return cls(GameStatus.CHECKMATE, winner=winner)

    @classmethod
    def stalemate(cls) -> Outcome:
        return cls(GameStatus.STALEMATE)

    @classmethod
    def draw(cls, reason: DrawReason) -> Outcome:
        return cls(GameStatus.DRAW, draw_reason=reason)

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    def __str__(self) -> str:
        if self.status == GameStatus.IN_PROGRESS:
            return f"in progress ({self.side_to_move} to move)"
        if self.status == GameStatus.CHECKMATE:
            return f"checkmate, {self.winner} wins"
        if self.status == GameStatus.STALEMATE:
            return "stalemate"
        if self.draw_reason is None:
            return "draw"
        return f"draw ({self.draw_reason.name.lower().replace('_', ' ')})"


@dataclass(frozen=True, slots=True)
class AppliedMove:
    """A single entry in the move history, emitted to observers."""

    from_sq: Square
    to_sq: Square
    color: Color
    piece_type: PieceType
    captured: Piece | None
    promotion: PieceType | None
    notation: str
    gives_check: bool = False
    is_castling: bool = False
    is_en_passant: bool = False

    @property
    def move(self) -> Move:
        return Move(self.from_sq, self.to_sq, self.promotion)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None


@dataclass
class GameState:
    """Owns the live position and drives it from move to move.

    No threading and no UI. The live board is only ever changed through
    :meth:`apply_move` and :meth:`undo_last_move`.
    """

    rules: RuleSet = field(default_factory=RuleSet.standard)
    position: Position = field(init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    outcome: Outcome = field(init=False)
    in_check: bool = field(default=False, init=False)
    move_history: list[AppliedMove] = field(default_factory=list, init=False)
    start_fen: str | None = field(default=STARTING_FEN, init=False)
    _undo_stack: list[tuple[Outcome, bool]] = field(
        default_factory=list, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._load(position_from_fen(STARTING_FEN))
        self.phase = GamePhase.NOT_STARTED

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        fen: str | None = None,
        *,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        rules: RuleSet | None = None,
    ) -> None:
        """Initialise (or reset) the game.

        Pass a *fen* for presets and puzzles, or a literal *board* with the
        *side_to_move*. A literal board starts without castling rights or an
        en passant target. With neither, the standard layout is used.
        """
        if fen is not None and board is not None:
            raise ValueError("Pass either a FEN or a board, not both")
        if rules is not None:
            self.rules = rules

        if board is not None:
            self.start_fen = None
            position = Position(board, side_to_move, CastlingRights.NONE)
        else:
            self.start_fen = fen or STARTING_FEN
            position = position_from_fen(self.start_fen)
        self._load(position)

    def _load(self, source: Position) -> None:
        castling = source.castling if self.rules.castling else CastlingRights.NONE
        en_passant = source.en_passant if self.rules.en_passant else None
        self.position = Position(
            source.board.clone(),
            source.side_to_move,
            castling,
            en_passant,
            source.halfmove_clock,
            source.fullmove_number,
            en_passant_enabled=self.rules.en_passant,
        )
        self.move_history.clear()
        self._undo_stack.clear()
        self.in_check = Rules.is_in_check(self.position)
        self.outcome = self._compute_outcome()
        self.phase = (
            GamePhase.GAME_OVER if self.outcome.is_terminal else GamePhase.AWAITING_MOVE
        )

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> AppliedMove:
        """Validate and play a move for the side to move.

        Raises :class:`IllegalMove` (state unchanged) when the request is not
        legal, and :class:`GameOverError` once the game has ended.
        """
        if self.outcome.is_terminal:
            raise GameOverError(f"Game is over: {self.outcome}")

        board = self.position.board
        piece = board[from_sq]
        if piece is None:
            raise IllegalMove(f"No piece on {from_sq}")
        if piece.color != self.side_to_move:
            raise IllegalMove(f"It is {self.side_to_move}'s move, not {piece.color}'s")
        if to_sq not in self._generator().legal_moves(from_sq):
            raise IllegalMove(f"Illegal move {from_sq}{to_sq}")

        promo: PieceType | None = None
        if piece.piece_type == PieceType.PAWN and to_sq.row == piece.color.promotion_row:
            promo = promotion or PieceType.QUEEN
            if promo not in PROMOTION_TYPES:
                raise IllegalMove(f"Cannot promote to {promo.name.lower()}")

        move = Move(from_sq, to_sq, promo)
        castle = is_castling_move(piece, move)
        en_passant = is_en_passant_move(board, piece, move)

        self._undo_stack.append((self.outcome, self.in_check))
        captured = self.position.make_move(move)

        self.in_check = Rules.is_in_check(self.position)
        self.outcome = self._compute_outcome()

        record = AppliedMove(
            from_sq=from_sq,
            to_sq=to_sq,
            color=piece.color,
            piece_type=piece.piece_type,
            captured=captured,
            promotion=promo,
            notation=move_notation(piece.piece_type, to_sq, captured),
            gives_check=self.in_check,
            is_castling=castle,
            is_en_passant=en_passant,
        )
        self.move_history.append(record)
        _LOGGER.debug("Applied %s as %s", move, record.notation)

        if self.outcome.is_terminal:
            self.phase = GamePhase.GAME_OVER
            _LOGGER.info("Game over after %d plies: %s", self.ply_count, self.outcome)
        return record

    def undo_last_move(self) -> AppliedMove | None:
        """Undo the last move. Returns the undone record, or None if empty."""
        if not self.move_history:
            return None

        record = self.move_history.pop()
        self.position.unmake_move()
        self.outcome, self.in_check = self._undo_stack.pop()
        self.phase = GamePhase.AWAITING_MOVE
        return record

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self.position.board

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    def legal_moves_from(self, sq: Square) -> set[Square]:
        """Legal destinations for a piece of the side to move on *sq*.

        Empty when the square is empty, holds an opponent piece, or the game
        is over.
        """
        piece = self.position.board[sq]
        if self.is_game_over or piece is None or piece.color != self.side_to_move:
            return set()
        return self._generator().legal_moves(sq)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        if self.is_game_over:
            return []
        return self._generator().generate_legal_moves(self.side_to_move)

    # ── Internal ─────────────────────────────────────────────────────────

    def _generator(self) -> MoveGenerator:
        return MoveGenerator.for_position(self.position)

    def _compute_outcome(self) -> Outcome:
        side = self.side_to_move
        if not self._generator().has_any_legal_move(side):
            if self.in_check:
                return Outcome.checkmate(side.opposite)
            return Outcome.stalemate()

        rules = self.rules
        if rules.fifty_move_rule and Rules.is_fifty_move_rule(self.position):
            return Outcome.draw(DrawReason.FIFTY_MOVE_RULE)
        if rules.insufficient_material and Rules.is_insufficient_material(
            self.position
        ):
            return Outcome.draw(DrawReason.INSUFFICIENT_MATERIAL)
        if rules.threefold_repetition and Rules.is_threefold_repetition(self.position):
            return Outcome.draw(DrawReason.THREEFOLD_REPETITION)
        return Outcome.in_progress(side)
