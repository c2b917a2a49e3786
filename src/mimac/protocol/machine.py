"""Generic per-role protocol state machine.

The machine knows nothing about a particular protocol. It enforces whatever
``TransitionGraph`` it is given, so new variants only need a new graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mimac.protocol.errors import ProtocolGraphViolation
from mimac.protocol.graph import TransitionGraph
from mimac.protocol.states import NodeState, Role
from mimac.utils.logging import get_logger

if TYPE_CHECKING:
    from mimac.energy.models import EnergyLedger

logger = get_logger("protocol.machine")


@dataclass(frozen=True)
class TransitionEvent:
    """One recorded state transition.

    Attributes:
        role: Role that changed state.
        from_state: State before the transition.
        to_state: State after the transition.
        reason: Descriptive trigger label.
    """

    role: Role
    from_state: NodeState
    to_state: NodeState
    reason: str

    def describe(self) -> str:
        """Narration line for this transition."""
        return f"{self.from_state.label} -> {self.to_state.label} ({self.reason})"


@dataclass
class RoleState:
    """Current state of one role.

    Attributes:
        current_state: State the role is in.
        history: Transitions taken by this role, in order.
    """

    current_state: NodeState = NodeState.IDLE
    history: list[TransitionEvent] = field(default_factory=list)


class ProtocolStateMachine:
    """State machine tracking both roles of one session.

    Every role starts in IDLE. A transition is accepted only when the role's
    current state is a legal predecessor of the target in the graph. A
    rejected transition leaves the roles and the ledger untouched.

    Example:
        >>> machine = ProtocolStateMachine(MI_MAC_GRAPH, EnergyLedger())
        >>> event = machine.transition(Role.INITIATOR, NodeState.DATA_ACQUIRE, "sensor interrupt")
        >>> machine.current_state(Role.INITIATOR).name
        'DATA_ACQUIRE'
    """

    def __init__(self, graph: TransitionGraph, ledger: EnergyLedger):
        """Initialize the machine.

        Args:
            graph: Transition graph to enforce.
            ledger: Session ledger receiving transition counts.
        """
        self.graph = graph
        self.ledger = ledger
        self.roles: dict[Role, RoleState] = {role: RoleState() for role in Role}
        self.log: list[TransitionEvent] = []

    def current_state(self, role: Role) -> NodeState:
        """Current state of a role."""
        return self.roles[role].current_state

    def transition(self, role: Role, to: NodeState, reason: str) -> TransitionEvent:
        """Move a role to a new state.

        Args:
            role: Role to move.
            to: Target state.
            reason: Descriptive trigger label.

        Returns:
            The recorded transition.

        Raises:
            ProtocolGraphViolation: If the move is not an edge of the graph.
        """
        role_state = self.roles[role]
        current = role_state.current_state
        if not self.graph.is_legal(role, current, to):
            raise ProtocolGraphViolation(role.name, current.label, to.label, reason)

        event = TransitionEvent(role=role, from_state=current, to_state=to, reason=reason)
        role_state.current_state = to
        role_state.history.append(event)
        self.log.append(event)
        self.ledger.record_transition()
        logger.debug(f"[{self.graph.name}] {role.label}: {event.describe()}")
        return event

    def all_idle(self) -> bool:
        """Whether every role is back in IDLE."""
        return all(rs.current_state is NodeState.IDLE for rs in self.roles.values())

    def get_statistics(self) -> dict[str, Any]:
        """Get machine statistics.

        Returns:
            Dictionary with current states and per-role transition counts.
        """
        return {
            "graph": self.graph.name,
            "current_states": {r.name: rs.current_state.name for r, rs in self.roles.items()},
            "transitions": {r.name: len(rs.history) for r, rs in self.roles.items()},
            "total_transitions": len(self.log),
        }
