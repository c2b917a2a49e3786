"""Structured session events and the sinks that consume them.

The session core produces events and never formats them. Sinks decide what
to do with each event (record, log, render).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

from mimac.protocol.coils import CoilReading
from mimac.protocol.machine import TransitionEvent
from mimac.protocol.packets import Coil, PacketType
from mimac.protocol.states import Role
from mimac.utils.logging import get_logger

E = TypeVar("E")


@dataclass(frozen=True)
class SessionStarted:
    """A protocol session is about to run."""

    variant: str
    title: str


@dataclass(frozen=True)
class CoilSelected:
    """The responder ranked the coil links and picked the best one."""

    selected: CoilReading
    readings: tuple[CoilReading, ...]


@dataclass(frozen=True)
class PacketSendEvent:
    """One packet put on the air.

    Attributes:
        packet_type: Packet type.
        size_bytes: Costed packet size.
        sender: Sending role.
        receiver: Receiving role.
        coil: Transmit coil, or None when the variant has no coil diversity.
        energy_uj: Energy charged for the send.
    """

    packet_type: PacketType
    size_bytes: int
    sender: Role
    receiver: Role
    coil: Coil | None
    energy_uj: float


@dataclass(frozen=True)
class SessionCompleted:
    """A protocol session finished with both roles back in IDLE."""

    variant: str
    total_energy_uj: float
    state_transitions: int
    packets_sent: int


class EventSink(Protocol):
    """Consumer of session events."""

    def emit(self, event: Any) -> None: ...


class NullSink:
    """Sink that discards every event."""

    def emit(self, event: Any) -> None:
        pass


@dataclass
class RecordingSink:
    """Sink that keeps every event in order."""

    events: list[Any] = field(default_factory=list)

    def emit(self, event: Any) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[E]) -> list[E]:
        """Recorded events of one type, in order."""
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()


class LoggingSink:
    """Sink that narrates events through the package logger."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self.logger = logger or get_logger("events")
        self.level = level

    def emit(self, event: Any) -> None:
        self.logger.log(self.level, describe_event(event))


def describe_event(event: Any) -> str:
    """One-line narration of a session event."""
    if isinstance(event, SessionStarted):
        return f"=== {event.title} ==="
    if isinstance(event, TransitionEvent):
        return f"[State Transition] {event.role.label}: {event.describe()}"
    if isinstance(event, CoilSelected):
        scanned = ", ".join(f"{r.coil.label}={r.rssi_dbm} dBm" for r in event.readings)
        return (
            f"[Coil Selection] {scanned} -> selected {event.selected.coil.label} "
            f"(RSSI = {event.selected.rssi_dbm} dBm)"
        )
    if isinstance(event, PacketSendEvent):
        coil = f" via coil {event.coil.label}" if event.coil is not None else ""
        return (
            f"[Packet Transmission] {event.packet_type.label} "
            f"{event.sender.label} -> {event.receiver.label}{coil} "
            f"({event.size_bytes} bytes, {event.energy_uj:.2f} uJ)"
        )
    if isinstance(event, SessionCompleted):
        return (
            f"=== {event.variant} complete: {event.total_energy_uj:.2f} uJ, "
            f"{event.state_transitions} transitions, {event.packets_sent} packets ==="
        )
    summary = getattr(event, "summary", None)
    if callable(summary):
        return summary()
    return str(event)
