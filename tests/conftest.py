"""Pytest fixtures for mimac tests."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from mimac.energy import CurrentProfile, EnergyLedger, EnergyModel  # noqa: E402
from mimac.protocol import Coil, CoilReading, PacketCatalog  # noqa: E402
from mimac.simulation import ProtocolRunner, RecordingSink, ScenarioConfig  # noqa: E402


@pytest.fixture
def profile():
    """Default per-state current profile."""
    return CurrentProfile()


@pytest.fixture
def energy_model(profile):
    """Energy model with the default profile and a 10-byte DATA packet."""
    return EnergyModel(profile, PacketCatalog(data_bytes=10))


@pytest.fixture
def ledger():
    """Fresh, empty ledger."""
    return EnergyLedger()


@pytest.fixture
def scenario():
    """Default scenario."""
    return ScenarioConfig()


@pytest.fixture
def sink():
    """Sink recording every emitted event."""
    return RecordingSink()


@pytest.fixture
def runner(scenario, sink):
    """Runner wired to the default scenario and a recording sink."""
    return ProtocolRunner(scenario, sink)


@pytest.fixture
def default_readings():
    """Default coil readings in scan order."""
    return [
        CoilReading(Coil.X, -45.5),
        CoilReading(Coil.Y, -52.3),
        CoilReading(Coil.Z, -48.7),
    ]
