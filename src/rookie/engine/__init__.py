"""Heuristic AI package: one-ply move evaluator and Qt worker bridge."""

from rookie.engine.evaluator import (
    PIECE_VALUES,
    EvaluationWeights,
    MoveEvaluator,
    material_score,
)
from rookie.engine.qt_bridge import EngineWorker

__all__ = [
    "PIECE_VALUES",
    "EngineWorker",
    "EvaluationWeights",
    "MoveEvaluator",
    "material_score",
]
