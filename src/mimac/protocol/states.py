"""Node states and communication roles.

Both protocol variants share the same five radio states. Each role in a
session owns its own current state.
"""

from __future__ import annotations

from enum import Enum, auto


class NodeState(Enum):
    """Radio/MCU state of a node during a protocol session."""

    IDLE = auto()  # Ultra-low power listening
    RECEIVE = auto()  # Packet decoding
    CHANNEL_SENSING = auto()  # Carrier detection
    DATA_ACQUIRE = auto()  # Sensor data collection
    TRANSMIT = auto()  # Packet transmission

    @classmethod
    def from_name(cls, name: str) -> "NodeState":
        """Get state from name string.

        Args:
            name: State name (case insensitive, e.g. "channel_sensing").

        Returns:
            NodeState enum value.

        Raises:
            ValueError: If name is not a valid state.
        """
        name_upper = name.upper()
        for state in cls:
            if state.name == name_upper:
                return state
        raise ValueError(f"Unknown node state: {name}")

    @property
    def label(self) -> str:
        """Human-readable label for narration."""
        labels = {
            NodeState.IDLE: "IDLE",
            NodeState.RECEIVE: "RECEIVE",
            NodeState.CHANNEL_SENSING: "CHANNEL_SENSING",
            NodeState.DATA_ACQUIRE: "DATA_ACQUIRE",
            NodeState.TRANSMIT: "TRANSMIT",
        }
        return labels[self]


class Role(Enum):
    """Communication role within a session."""

    INITIATOR = auto()
    RESPONDER = auto()

    @property
    def label(self) -> str:
        """Node name used in packet narration."""
        labels = {
            Role.INITIATOR: "Source",
            Role.RESPONDER: "Destination",
        }
        return labels[self]

    @property
    def peer(self) -> "Role":
        """The other role of the session."""
        if self is Role.INITIATOR:
            return Role.RESPONDER
        return Role.INITIATOR
