"""RSSI-based coil selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from mimac.protocol.errors import EmptySelectionInput
from mimac.protocol.packets import Coil


@dataclass(frozen=True)
class CoilReading:
    """Signal strength observed on one coil link.

    Attributes:
        coil: Coil axis.
        rssi_dbm: Received signal strength in dBm.
    """

    coil: Coil
    rssi_dbm: float


def select_best_coil(readings: Sequence[CoilReading]) -> CoilReading:
    """Pick the coil with the strongest signal.

    Readings are scanned in order and a later reading only replaces the
    running best when it is strictly greater, so ties go to the earlier coil.

    Args:
        readings: Ordered per-coil readings.

    Returns:
        The winning reading.

    Raises:
        EmptySelectionInput: If no readings are given.
    """
    if not readings:
        raise EmptySelectionInput("Coil selection requires at least one reading")

    best = readings[0]
    for reading in readings[1:]:
        if reading.rssi_dbm > best.rssi_dbm:
            best = reading
    return best
