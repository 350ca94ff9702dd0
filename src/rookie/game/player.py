"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from rookie.core.enums import Color
from rookie.game.interfaces import IPlayer

if TYPE_CHECKING:
    from rookie.core.position import Position


class _SeatedPlayer(IPlayer):
    """Shared storage for a side and a display name."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str) -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name


class HumanPlayer(_SeatedPlayer):
    """Someone at the board. Moves arrive through ``submit_move``."""

    __slots__ = ()

    def __init__(self, color: Color, name: str = "") -> None:
        super().__init__(color, name or f"Player ({color})")

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position) -> None:
        pass  # the UI calls submit_move once a move is picked

    def cancel(self) -> None:
        pass


class AIPlayer(_SeatedPlayer):
    """Computer opponent that forwards move requests to a handler.

    The handler is usually wired to ``EngineWorker.schedule_move``; the
    worker's ``best_move_ready`` signal then feeds the chosen move back into
    ``GameController.submit_move``. Without handlers both calls are no-ops.
    """

    __slots__ = ("_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Computer",
        on_request_move: Callable[[Position], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(color, name)
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, position: Position) -> None:
        handler = self._on_request_move
        if handler is not None:
            handler(position)

    def cancel(self) -> None:
        handler = self._on_cancel
        if handler is not None:
            handler()
