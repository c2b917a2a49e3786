"""Current-draw specifications for energy modeling.

Per-state supply currents of a magnetic-induction sensor node, taken from the
MI-MAC paper's state current table.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from mimac.protocol.states import NodeState


@dataclass
class CurrentProfile:
    """Per-state current consumption.

    Attributes:
        idle_ua: Current in IDLE (uA).
        receive_ua: Current in RECEIVE (uA).
        data_acquire_ua: Current in DATA_ACQUIRE (uA).
        channel_sensing_ua: Current in CHANNEL_SENSING (uA).
        transmit_ua: Current in TRANSMIT (uA), also used to cost every packet.
    """

    idle_ua: float = 50.0
    receive_ua: float = 200.0
    data_acquire_ua: float = 250.0
    channel_sensing_ua: float = 200.0
    transmit_ua: float = 1120.0

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must be non-negative, got {getattr(self, f.name)}")

    def current(self, state: NodeState) -> float:
        """Current draw for a node state in uA."""
        currents = {
            NodeState.IDLE: self.idle_ua,
            NodeState.RECEIVE: self.receive_ua,
            NodeState.DATA_ACQUIRE: self.data_acquire_ua,
            NodeState.CHANNEL_SENSING: self.channel_sensing_ua,
            NodeState.TRANSMIT: self.transmit_ua,
        }
        return currents[state]

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> CurrentProfile:
        """Create a profile from a mapping keyed by state name.

        Keys may be state names (``"receive"``) or field names
        (``"receive_ua"``). Missing keys keep their defaults.

        Raises:
            ValueError: If a key names no known state.
        """
        kwargs: dict[str, float] = {}
        for key, value in config.items():
            name = key[:-3] if key.endswith("_ua") else key
            state = NodeState.from_name(name)
            kwargs[f"{state.name.lower()}_ua"] = float(value)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, float]:
        """Convert to a mapping keyed by lower-case state name."""
        return {state.name.lower(): self.current(state) for state in NodeState}
