"""GameController: runs a game between two players over a GameState.

Listeners subscribe to plain callback lists on :class:`GameEvents`; the
controller never imports any UI code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rookie.core.board import Board
from rookie.core.enums import Color, PieceType
from rookie.core.errors import IllegalMove
from rookie.core.types import Square
from rookie.game.interfaces import GamePhase, IGameController, IPlayer
from rookie.game.state import AppliedMove, GameState, Outcome, RuleSet

_LOGGER = logging.getLogger(__name__)


@dataclass
class GameEvents:
    """Subscriber lists, called in registration order."""

    on_move: list[Callable[[AppliedMove, GameState], None]] = field(
        default_factory=list
    )
    on_game_over: list[Callable[[Outcome], None]] = field(default_factory=list)
    on_phase_changed: list[Callable[[GamePhase], None]] = field(
        default_factory=list
    )

    def move_applied(self, record: AppliedMove, state: GameState) -> None:
        for handler in self.on_move:
            handler(record, state)

    def game_over(self, outcome: Outcome) -> None:
        for handler in self.on_game_over:
            handler(outcome)

    def phase_changed(self, phase: GamePhase) -> None:
        for handler in self.on_phase_changed:
            handler(phase)


class GameController(IGameController):
    """Turns player input into state changes and tells listeners about them.

    Single-threaded: an AI reply comes back through ``submit_move``, called
    from the engine worker's signal handler on the owning thread.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # -- Game lifecycle -------------------------------------------------------

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        fen: str | None = None,
        rules: RuleSet | None = None,
        *,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Start over with *white* and *black*.

        The position comes from *fen*, a literal *board* with *side_to_move*,
        or the standard layout. A position that is already decided reports
        game over straight away.
        """
        for previous in self._players.values():
            previous.cancel()
        self._players = {Color.WHITE: white, Color.BLACK: black}

        state = GameState(rules or RuleSet.standard())
        state.setup(fen, board=board, side_to_move=side_to_move)
        self._state = state
        _LOGGER.debug("New game: %s vs %s", white.name, black.name)

        if state.is_game_over:
            self._finish()
        else:
            self._hand_turn_over()

    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False

        try:
            record = self._state.apply_move(from_sq, to_sq, promotion)
        except IllegalMove as exc:
            _LOGGER.debug("Rejected %s%s: %s", from_sq, to_sq, exc)
            return False

        self.events.move_applied(record, self._state)
        if self._state.is_game_over:
            self._finish()
        else:
            self._hand_turn_over()
        return True

    def undo_move(self) -> bool:
        state = self._state
        if state.is_game_over or not state.move_history:
            return False

        waiting = self.current_player
        if waiting is not None and not waiting.is_human:
            waiting.cancel()

        state.undo_last_move()
        self._hand_turn_over()
        return True

    # -- Turn handling --------------------------------------------------------

    def _hand_turn_over(self) -> None:
        mover = self.current_player
        if mover is None:
            return

        phase = GamePhase.AWAITING_MOVE if mover.is_human else GamePhase.THINKING
        self._state.phase = phase
        self.events.phase_changed(phase)
        if not mover.is_human:
            mover.request_move(self._state.position.copy())

    def _finish(self) -> None:
        self.events.phase_changed(GamePhase.GAME_OVER)
        self.events.game_over(self._state.outcome)
