"""Protocol definitions for MI-MAC and CSMA/CA.

This module provides node states, the packet catalog, coil selection,
data-driven transition graphs and the generic per-role state machine.
"""

from mimac.protocol.errors import (
    DegenerateComparison,
    EmptySelectionInput,
    MacError,
    ProtocolGraphViolation,
)
from mimac.protocol.states import NodeState, Role
from mimac.protocol.packets import Coil, PacketCatalog, PacketSpec, PacketType
from mimac.protocol.coils import CoilReading, select_best_coil
from mimac.protocol.graph import CSMA_CA_GRAPH, MI_MAC_GRAPH, TransitionGraph
from mimac.protocol.machine import ProtocolStateMachine, RoleState, TransitionEvent

__all__ = [
    # Errors
    "MacError",
    "ProtocolGraphViolation",
    "EmptySelectionInput",
    "DegenerateComparison",
    # States
    "NodeState",
    "Role",
    # Packets
    "PacketType",
    "PacketSpec",
    "PacketCatalog",
    "Coil",
    # Coil selection
    "CoilReading",
    "select_best_coil",
    # Graphs
    "TransitionGraph",
    "MI_MAC_GRAPH",
    "CSMA_CA_GRAPH",
    # State machine
    "ProtocolStateMachine",
    "RoleState",
    "TransitionEvent",
]
