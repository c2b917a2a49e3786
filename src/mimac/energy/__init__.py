"""Energy modeling module for mimac.

This module provides per-state current profiles and the session energy ledger.
"""

from mimac.energy.hardware import CurrentProfile
from mimac.energy.models import (
    DEFAULT_STATE_SCALE,
    DEFAULT_TRANSMIT_SCALE,
    EnergyLedger,
    EnergyModel,
)

__all__ = [
    "CurrentProfile",
    "EnergyLedger",
    "EnergyModel",
    "DEFAULT_STATE_SCALE",
    "DEFAULT_TRANSMIT_SCALE",
]
