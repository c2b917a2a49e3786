"""Transition graphs for the supported protocol variants.

A graph is an ordered state path per role. Consecutive pairs of the path are
the legal edges for that role, and the path length gives the number of
transitions a complete session traverses.
"""

from __future__ import annotations

from dataclasses import dataclass

from mimac.protocol.states import NodeState, Role

_I = NodeState.IDLE
_RX = NodeState.RECEIVE
_CS = NodeState.CHANNEL_SENSING
_DA = NodeState.DATA_ACQUIRE
_TX = NodeState.TRANSMIT


@dataclass(frozen=True)
class TransitionGraph:
    """Legal per-role state paths of one protocol variant.

    Attributes:
        name: Variant identifier (e.g. "mi_mac").
        initiator: Ordered state path of the initiator.
        responder: Ordered state path of the responder.
    """

    name: str
    initiator: tuple[NodeState, ...]
    responder: tuple[NodeState, ...]

    def __post_init__(self) -> None:
        for role in Role:
            path = self.path(role)
            if len(path) < 2 or path[0] is not _I or path[-1] is not _I:
                raise ValueError(
                    f"{self.name}: {role.name} path must start and end in IDLE"
                )

    def path(self, role: Role) -> tuple[NodeState, ...]:
        """Ordered state path for a role."""
        if role is Role.INITIATOR:
            return self.initiator
        return self.responder

    def edges(self, role: Role) -> tuple[tuple[NodeState, NodeState], ...]:
        """Traversed (from, to) edges for a role, in order."""
        path = self.path(role)
        return tuple(zip(path[:-1], path[1:]))

    def legal_predecessors(self, role: Role, target: NodeState) -> frozenset[NodeState]:
        """States from which a role may move to ``target``."""
        return frozenset(src for src, dst in self.edges(role) if dst is target)

    def is_legal(self, role: Role, current: NodeState, target: NodeState) -> bool:
        """Whether ``current -> target`` is an edge of the role's graph."""
        return current in self.legal_predecessors(role, target)

    def edge_count(self, role: Role | None = None) -> int:
        """Number of transitions in a complete session.

        Args:
            role: Count only this role's edges; both roles if None.
        """
        if role is not None:
            return len(self.edges(role))
        return sum(len(self.edges(r)) for r in Role)


MI_MAC_GRAPH = TransitionGraph(
    name="mi_mac",
    initiator=(_I, _DA, _CS, _TX, _RX, _CS, _TX, _I),
    responder=(_I, _RX, _CS, _TX, _RX, _I),
)

CSMA_CA_GRAPH = TransitionGraph(
    name="csma_ca",
    initiator=(_I, _DA, _CS, _TX, _RX, _TX, _RX, _I),
    responder=(_I, _RX, _CS, _TX, _RX, _TX, _I),
)
