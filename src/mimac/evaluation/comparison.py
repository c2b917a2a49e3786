"""Relative metrics between two completed session ledgers.

This module compares a candidate ledger against a baseline ledger.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from mimac.energy.models import EnergyLedger
from mimac.protocol.errors import DegenerateComparison
from mimac.utils.logging import get_logger

logger = get_logger("evaluation.comparison")


@dataclass(frozen=True)
class ComparisonResult:
    """Candidate-versus-baseline comparison.

    Attributes:
        packet_delta: Candidate packets minus baseline packets.
        transition_delta: Candidate transitions minus baseline transitions.
        energy_saving_percent: Energy saved relative to the baseline, or
            None when the baseline consumed no energy.
        candidate_energy_uj: Candidate total energy.
        baseline_energy_uj: Baseline total energy.
    """

    packet_delta: int
    transition_delta: int
    energy_saving_percent: float | None
    candidate_energy_uj: float
    baseline_energy_uj: float

    @property
    def applicable(self) -> bool:
        """Whether the energy saving is defined."""
        return self.energy_saving_percent is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "packet_delta": self.packet_delta,
            "transition_delta": self.transition_delta,
            "energy_saving_percent": self.energy_saving_percent,
            "candidate_energy_uj": self.candidate_energy_uj,
            "baseline_energy_uj": self.baseline_energy_uj,
        }

    def summary(self) -> str:
        """Get summary string."""
        saving = (
            f"{self.energy_saving_percent:.1f}%" if self.applicable else "n/a (zero baseline)"
        )
        return (
            f"Energy Saving: {saving}\n"
            f"Packet Delta: {self.packet_delta:+d}\n"
            f"Transition Delta: {self.transition_delta:+d}"
        )


def energy_saving_percent(candidate_uj: float, baseline_uj: float) -> float:
    """Energy saved by the candidate relative to the baseline, in percent.

    Raises:
        DegenerateComparison: If the baseline energy is zero or the result
            is not finite.
    """
    if baseline_uj == 0:
        raise DegenerateComparison("Baseline total energy is zero")
    saving = (baseline_uj - candidate_uj) / baseline_uj * 100.0
    if not np.isfinite(saving):
        raise DegenerateComparison(f"Energy saving is not finite: {saving}")
    return float(saving)


def compare_ledgers(candidate: EnergyLedger, baseline: EnergyLedger) -> ComparisonResult:
    """Compare two completed ledgers.

    A zero-energy baseline does not raise; the saving is reported as not
    applicable instead.

    Args:
        candidate: Ledger of the protocol under evaluation.
        baseline: Ledger of the reference protocol.

    Returns:
        ComparisonResult with deltas and the energy saving.
    """
    try:
        saving: float | None = energy_saving_percent(
            candidate.total_energy_uj, baseline.total_energy_uj
        )
    except DegenerateComparison as exc:
        logger.warning(f"Energy saving not applicable: {exc}")
        saving = None

    return ComparisonResult(
        packet_delta=candidate.packets_sent - baseline.packets_sent,
        transition_delta=candidate.state_transitions - baseline.state_transitions,
        energy_saving_percent=saving,
        candidate_energy_uj=candidate.total_energy_uj,
        baseline_energy_uj=baseline.total_energy_uj,
    )
