"""Qt bridge that hands AI moves back to the GUI after a thinking delay."""

from __future__ import annotations

import logging
import random

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from rookie.core.position import Position
from rookie.engine.evaluator import EvaluationWeights, MoveEvaluator

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Computes evaluator moves on demand and reports them through signals.

    :meth:`request_move` answers immediately; :meth:`schedule_move` waits
    ``think_delay_ms`` first so the opponent does not reply instantly.
    """

    best_move_ready = pyqtSignal(int, object)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_evaluator", "_think_delay_ms", "_generation")

    def __init__(
        self,
        *,
        think_delay_ms: int = 500,
        weights: EvaluationWeights | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self._evaluator = MoveEvaluator(weights, rng)
        self._think_delay_ms = max(think_delay_ms, 0)
        self._generation = 0

    @property
    def think_delay_ms(self) -> int:
        return self._think_delay_ms

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Pick a move for the side to move in *position_obj* and emit it."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        try:
            move = self._evaluator.choose_move(position_obj)
        except Exception as exc:
            _LOGGER.exception("Move evaluation failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if move is None:
            self.search_no_move.emit(request_id)
            return
        self.best_move_ready.emit(request_id, move)

    def schedule_move(self, position: Position, request_id: int = 0) -> None:
        """Run :meth:`request_move` after the thinking delay.

        A :meth:`cancel` issued before the timer fires drops the request.
        """
        generation = self._generation

        def _fire() -> None:
            if generation != self._generation:
                _LOGGER.debug("Dropped cancelled request %d", request_id)
                return
            self.request_move(position, request_id)

        QTimer.singleShot(self._think_delay_ms, _fire)

    @pyqtSlot()
    def cancel(self) -> None:
        """Drop every request scheduled so far."""
        self._generation += 1

    @pyqtSlot(int)
    def set_think_delay(self, think_delay_ms: int) -> None:
        """Update the delay (takes effect on the next scheduled request)."""
        self._think_delay_ms = max(think_delay_ms, 0)
