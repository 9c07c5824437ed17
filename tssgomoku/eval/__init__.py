"""Evaluation helpers."""

from .tactical_tests import (
    ALL_TACTICAL_POSITIONS,
    TacticalPosition,
    evaluate_tactical_suite,
    get_tactical_positions,
)

__all__ = [
    "ALL_TACTICAL_POSITIONS",
    "TacticalPosition",
    "evaluate_tactical_suite",
    "get_tactical_positions",
]
