"""Session scripts for the supported protocol variants.

A script is an ordered tuple of steps that the runner interprets against a
state machine and an energy ledger. Steps carry no behavior of their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from mimac.protocol.graph import CSMA_CA_GRAPH, MI_MAC_GRAPH, TransitionGraph
from mimac.protocol.packets import PacketType
from mimac.protocol.states import NodeState, Role


class CoilMode(Enum):
    """Which coil(s) a send uses."""

    NONE = "none"  # No coil diversity
    SWEEP = "sweep"  # One packet per configured coil
    BEST = "best"  # Only the selected coil


@dataclass(frozen=True)
class Move:
    """Transition a role to a new state."""

    role: Role
    to: NodeState
    reason: str


@dataclass(frozen=True)
class Hold:
    """Charge a role's current state for a named hold phase."""

    role: Role
    phase: str


@dataclass(frozen=True)
class Send:
    """Send a packet from a role to its peer."""

    packet_type: PacketType
    sender: Role
    coil_mode: CoilMode = CoilMode.NONE


@dataclass(frozen=True)
class SelectCoil:
    """Announce the best coil link."""


Step = Union[Move, Hold, Send, SelectCoil]


@dataclass(frozen=True)
class SessionScript:
    """Complete step sequence of one protocol variant.

    Attributes:
        name: Variant identifier, also the key of its hold durations.
        title: Display title.
        graph: Transition graph the moves must respect.
        steps: Ordered steps.
    """

    name: str
    title: str
    graph: TransitionGraph
    steps: tuple[Step, ...]

    @property
    def uses_coils(self) -> bool:
        """Whether any send depends on coil selection."""
        return any(
            isinstance(s, Send) and s.coil_mode is not CoilMode.NONE for s in self.steps
        ) or any(isinstance(s, SelectCoil) for s in self.steps)

    @property
    def hold_phases(self) -> frozenset[str]:
        """Names of all hold phases the script charges."""
        return frozenset(s.phase for s in self.steps if isinstance(s, Hold))


_SRC = Role.INITIATOR
_DST = Role.RESPONDER

MI_MAC_SCRIPT = SessionScript(
    name="mi_mac",
    title="Multi-Coil MI MAC",
    graph=MI_MAC_GRAPH,
    steps=(
        Move(_SRC, NodeState.DATA_ACQUIRE, "Sensor interrupt"),
        Hold(_SRC, "data_acquire"),
        Move(_SRC, NodeState.CHANNEL_SENSING, "Data ready"),
        Hold(_SRC, "channel_sensing"),
        Move(_SRC, NodeState.TRANSMIT, "Channel clear"),
        Send(PacketType.REV, _SRC, CoilMode.SWEEP),
        Move(_SRC, NodeState.RECEIVE, "Waiting for ACK"),
        Hold(_SRC, "ack_wait"),
        Move(_DST, NodeState.RECEIVE, "REV received"),
        Hold(_DST, "rev_receive"),
        SelectCoil(),
        Move(_DST, NodeState.CHANNEL_SENSING, "Prepare ACK"),
        Hold(_DST, "ack_sensing"),
        Move(_DST, NodeState.TRANSMIT, "Channel clear"),
        Send(PacketType.ACK, _DST, CoilMode.BEST),
        Move(_DST, NodeState.RECEIVE, "Waiting for data"),
        Move(_SRC, NodeState.CHANNEL_SENSING, "ACK received, ready to send data"),
        Hold(_SRC, "data_sensing"),
        Move(_SRC, NodeState.TRANSMIT, "Channel clear"),
        Send(PacketType.DATA, _SRC, CoilMode.BEST),
        Move(_SRC, NodeState.IDLE, "Transmission complete"),
        Hold(_DST, "data_receive"),
        Move(_DST, NodeState.IDLE, "Data received"),
    ),
)

CSMA_CA_SCRIPT = SessionScript(
    name="csma_ca",
    title="Traditional CSMA/CA MAC",
    graph=CSMA_CA_GRAPH,
    steps=(
        Move(_SRC, NodeState.DATA_ACQUIRE, "Data collection"),
        Hold(_SRC, "data_acquire"),
        Move(_SRC, NodeState.CHANNEL_SENSING, "Data ready"),
        Hold(_SRC, "channel_sensing"),
        Move(_SRC, NodeState.TRANSMIT, "Channel clear"),
        Send(PacketType.RTS, _SRC),
        Move(_SRC, NodeState.RECEIVE, "Waiting for CTS"),
        Hold(_SRC, "cts_wait"),
        Move(_DST, NodeState.RECEIVE, "RTS received"),
        Hold(_DST, "rts_receive"),
        Move(_DST, NodeState.CHANNEL_SENSING, "Prepare CTS"),
        Hold(_DST, "cts_sensing"),
        Move(_DST, NodeState.TRANSMIT, "Channel clear"),
        Send(PacketType.CTS, _DST),
        Move(_DST, NodeState.RECEIVE, "Waiting for data"),
        Move(_SRC, NodeState.TRANSMIT, "CTS received"),
        Send(PacketType.DATA, _SRC),
        Move(_SRC, NodeState.RECEIVE, "Waiting for ACK"),
        Hold(_SRC, "ack_wait"),
        Hold(_DST, "data_receive"),
        Move(_DST, NodeState.TRANSMIT, "Sending ACK"),
        Send(PacketType.ACK, _DST),
        Move(_DST, NodeState.IDLE, "Transmission complete"),
        Move(_SRC, NodeState.IDLE, "ACK received"),
    ),
)

SCRIPTS: dict[str, SessionScript] = {
    MI_MAC_SCRIPT.name: MI_MAC_SCRIPT,
    CSMA_CA_SCRIPT.name: CSMA_CA_SCRIPT,
}
