"""Game management layer: state machine, controller, players and puzzles.

Quick start::

    from rookie.game import GameController, HumanPlayer, RuleSet

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=HumanPlayer(Color.BLACK, "Bob"),
        rules=RuleSet.minimal(),
    )
"""

from rookie.game.controller import GameController, GameEvents
from rookie.game.interfaces import GamePhase, IGameController, IPlayer
from rookie.game.player import AIPlayer, HumanPlayer
from rookie.game.puzzles import (
    PUZZLES,
    Puzzle,
    PuzzleSession,
    PuzzleStatus,
    next_puzzle,
)
from rookie.game.state import AppliedMove, GameState, Outcome, RuleSet

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPlayer",
    # State
    "AppliedMove",
    "GameState",
    "Outcome",
    "RuleSet",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "HumanPlayer",
    # Puzzles
    "PUZZLES",
    "Puzzle",
    "PuzzleSession",
    "PuzzleStatus",
    "next_puzzle",
]
