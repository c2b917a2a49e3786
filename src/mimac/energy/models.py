"""Energy accounting for protocol sessions.

This module provides the per-session energy ledger and the model that
converts state holds and packet transmissions into energy charges.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mimac.energy.hardware import CurrentProfile
from mimac.protocol.packets import PacketCatalog, PacketType
from mimac.protocol.states import NodeState

DEFAULT_STATE_SCALE = 1.0
DEFAULT_TRANSMIT_SCALE = 0.001


@dataclass
class EnergyLedger:
    """Mutable per-session accumulator of energy and event counts.

    Attributes:
        total_energy_uj: Cumulative energy in uJ (never decreases).
        state_transitions: Number of state transitions recorded.
        packets_sent: Number of packets sent.
        breakdown: Energy per category (``state:<NAME>`` or ``tx:<PACKET>``).
    """

    total_energy_uj: float = 0.0
    state_transitions: int = 0
    packets_sent: int = 0
    breakdown: dict[str, float] = field(default_factory=dict)

    def add_energy(self, amount_uj: float, category: str) -> None:
        """Add a non-negative energy charge.

        Raises:
            ValueError: If the amount is negative.
        """
        if amount_uj < 0:
            raise ValueError(f"Energy charge must be non-negative, got {amount_uj}")
        self.total_energy_uj += amount_uj
        self.breakdown[category] = self.breakdown.get(category, 0.0) + amount_uj

    def record_transition(self) -> None:
        """Count one state transition."""
        self.state_transitions += 1

    def record_packet(self, packet_type: PacketType, amount_uj: float) -> None:
        """Count one packet send and add its transmission energy."""
        self.add_energy(amount_uj, f"tx:{packet_type.label}")
        self.packets_sent += 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_energy_uj": self.total_energy_uj,
            "state_transitions": self.state_transitions,
            "packets_sent": self.packets_sent,
            "breakdown": dict(self.breakdown),
        }


class EnergyModel:
    """Energy model for protocol sessions.

    State holds are charged as ``current(state) * units * state_scale``.
    Every packet send is charged at the transmit current as
    ``bits * transmit_current * transmit_scale``, whichever role sends it.

    Example:
        >>> model = EnergyModel(CurrentProfile(), PacketCatalog())
        >>> ledger = EnergyLedger()
        >>> model.charge_state(ledger, NodeState.DATA_ACQUIRE, 10)
        2500.0
        >>> round(model.charge_transmit(ledger, PacketType.REV), 2)
        116.48
    """

    def __init__(
        self,
        profile: CurrentProfile,
        catalog: PacketCatalog,
        state_scale: float = DEFAULT_STATE_SCALE,
        transmit_scale: float = DEFAULT_TRANSMIT_SCALE,
    ):
        """Initialize the energy model.

        Args:
            profile: Per-state current draw.
            catalog: Packet catalog used for bit sizes.
            state_scale: Conversion factor for state-hold charges.
            transmit_scale: Conversion factor for transmission charges.
        """
        if state_scale < 0 or transmit_scale < 0:
            raise ValueError("Energy scales must be non-negative")
        self.profile = profile
        self.catalog = catalog
        self.state_scale = state_scale
        self.transmit_scale = transmit_scale

    def state_energy(self, state: NodeState, units: float) -> float:
        """Energy of holding a state for a number of time units, in uJ."""
        if units < 0:
            raise ValueError(f"Hold duration must be non-negative, got {units}")
        return self.profile.current(state) * units * self.state_scale

    def transmit_energy(self, packet_type: PacketType) -> float:
        """Energy of sending one packet, in uJ."""
        return self.catalog.bit_size(packet_type) * self.profile.transmit_ua * self.transmit_scale

    def charge_state(self, ledger: EnergyLedger, state: NodeState, units: float) -> float:
        """Charge a state hold to the ledger.

        Returns:
            The charged energy in uJ.
        """
        energy = self.state_energy(state, units)
        ledger.add_energy(energy, f"state:{state.label}")
        return energy

    def charge_transmit(self, ledger: EnergyLedger, packet_type: PacketType) -> float:
        """Charge one packet send to the ledger and count the packet.

        Returns:
            The charged energy in uJ.
        """
        energy = self.transmit_energy(packet_type)
        ledger.record_packet(packet_type, energy)
        return energy
