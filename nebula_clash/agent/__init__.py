"""Opponent AI and its advisory collaborators."""

from .advisory import (
    LLMDifficultyCalibrator,
    LLMMoveAdvisor,
    MoveEvaluation,
    calibrate_difficulty,
    consult_advisor,
)
from .opponent import OpponentController, TurnSummary
from .targeting import TargetingHeuristic

__all__ = [
    "LLMDifficultyCalibrator",
    "LLMMoveAdvisor",
    "MoveEvaluation",
    "calibrate_difficulty",
    "consult_advisor",
    "OpponentController",
    "TurnSummary",
    "TargetingHeuristic",
]
