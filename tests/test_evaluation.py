"""Tests for ledger comparison."""

from __future__ import annotations

import logging
import math

import pytest

from mimac.energy import EnergyLedger
from mimac.evaluation import compare_ledgers, energy_saving_percent
from mimac.protocol import DegenerateComparison


def _ledger(energy: float, transitions: int = 0, packets: int = 0) -> EnergyLedger:
    return EnergyLedger(total_energy_uj=energy, state_transitions=transitions, packets_sent=packets)


class TestEnergySaving:
    """Tests for the saving percentage."""

    def test_saving(self):
        """Test (baseline - candidate) / baseline * 100."""
        assert energy_saving_percent(75.0, 100.0) == pytest.approx(25.0)

    def test_candidate_uses_more(self):
        """Test a negative saving when the candidate costs more."""
        assert energy_saving_percent(150.0, 100.0) == pytest.approx(-50.0)

    def test_zero_baseline_raises(self):
        """Test a zero baseline is degenerate."""
        with pytest.raises(DegenerateComparison):
            energy_saving_percent(10.0, 0.0)


class TestCompareLedgers:
    """Tests for compare_ledgers."""

    def test_self_comparison(self):
        """Test comparing a ledger with itself yields zero deltas."""
        ledger = _ledger(11183.84, transitions=12, packets=5)

        result = compare_ledgers(ledger, ledger)

        assert result.energy_saving_percent == 0
        assert result.packet_delta == 0
        assert result.transition_delta == 0
        assert result.applicable

    def test_deltas(self):
        """Test deltas are candidate minus baseline."""
        result = compare_ledgers(_ledger(80.0, 12, 5), _ledger(100.0, 13, 4))

        assert result.packet_delta == 1
        assert result.transition_delta == -1
        assert result.energy_saving_percent == pytest.approx(20.0)

    def test_zero_baseline_not_applicable(self, caplog):
        """Test a zero baseline is reported as not applicable."""
        with caplog.at_level(logging.WARNING, logger="mimac"):
            result = compare_ledgers(_ledger(10.0), _ledger(0.0))

        assert not result.applicable
        assert result.energy_saving_percent is None
        assert "not applicable" in caplog.text

    def test_zero_both_never_nan(self):
        """Test two empty ledgers give no NaN or infinity."""
        result = compare_ledgers(EnergyLedger(), EnergyLedger())

        saving = result.energy_saving_percent
        assert saving is None or math.isfinite(saving)

    def test_summary(self):
        """Test summary text for both outcomes."""
        assert "20.0%" in compare_ledgers(_ledger(80.0), _ledger(100.0)).summary()
        assert "n/a" in compare_ledgers(_ledger(80.0), _ledger(0.0)).summary()

    def test_to_dict(self):
        """Test dictionary conversion."""
        data = compare_ledgers(_ledger(80.0, 1, 1), _ledger(100.0, 1, 1)).to_dict()

        assert data["baseline_energy_uj"] == 100.0
        assert data["candidate_energy_uj"] == 80.0
        assert data["energy_saving_percent"] == pytest.approx(20.0)
