"""Evaluation module for mimac.

This module provides relative metrics between completed protocol sessions.
"""

from mimac.evaluation.comparison import (
    ComparisonResult,
    compare_ledgers,
    energy_saving_percent,
)

__all__ = [
    "ComparisonResult",
    "compare_ledgers",
    "energy_saving_percent",
]
