"""Protocol session runner.

This module interprets session scripts against a fresh state machine and
energy ledger, and runs the MI-MAC versus CSMA/CA comparison.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from mimac.energy.models import EnergyLedger, EnergyModel
from mimac.evaluation.comparison import ComparisonResult, compare_ledgers
from mimac.protocol.coils import CoilReading, select_best_coil
from mimac.protocol.errors import ProtocolGraphViolation
from mimac.protocol.machine import ProtocolStateMachine, TransitionEvent
from mimac.protocol.packets import Coil
from mimac.protocol.states import NodeState
from mimac.simulation.events import (
    CoilSelected,
    EventSink,
    NullSink,
    PacketSendEvent,
    SessionCompleted,
    SessionStarted,
)
from mimac.simulation.scenario import ScenarioConfig
from mimac.simulation.scripts import (
    CSMA_CA_SCRIPT,
    MI_MAC_SCRIPT,
    CoilMode,
    Hold,
    Move,
    SelectCoil,
    Send,
    SessionScript,
)
from mimac.utils.logging import log_metrics, session_logger


@dataclass
class SessionResult:
    """Outcome of one protocol session.

    Attributes:
        variant: Variant identifier.
        ledger: Combined energy ledger of both roles.
        transitions: Transitions in the order they were taken.
        packets: Packet sends in the order they happened.
        timeline: Transitions and packet sends interleaved in session order.
        selected_coil: Coil chosen by the responder, if the variant uses coils.
    """

    variant: str
    ledger: EnergyLedger
    transitions: list[TransitionEvent] = field(default_factory=list)
    packets: list[PacketSendEvent] = field(default_factory=list)
    timeline: list[TransitionEvent | PacketSendEvent] = field(default_factory=list)
    selected_coil: CoilReading | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "variant": self.variant,
            "ledger": self.ledger.to_dict(),
            "selected_coil": self.selected_coil.coil.label if self.selected_coil else None,
        }

    def to_frame(self) -> pd.DataFrame:
        """Session event log as a DataFrame, one row per transition or send.

        Rows follow the order in which the session produced them.
        """
        rows: list[dict[str, Any]] = []
        for event in self.timeline:
            if isinstance(event, TransitionEvent):
                rows.append(
                    {
                        "variant": self.variant,
                        "kind": "transition",
                        "role": event.role.name,
                        "detail": f"{event.from_state.name}->{event.to_state.name}",
                        "reason": event.reason,
                        "energy_uj": 0.0,
                    }
                )
            else:
                rows.append(
                    {
                        "variant": self.variant,
                        "kind": "packet",
                        "role": event.sender.name,
                        "detail": event.packet_type.label,
                        "reason": event.coil.label if event.coil is not None else "",
                        "energy_uj": event.energy_uj,
                    }
                )
        return pd.DataFrame(
            rows, columns=["variant", "kind", "role", "detail", "reason", "energy_uj"]
        )


@dataclass
class ComparisonReport:
    """Both session results and their comparison."""

    mi_mac: SessionResult
    csma_ca: SessionResult
    comparison: ComparisonResult

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "mi_mac": self.mi_mac.to_dict(),
            "csma_ca": self.csma_ca.to_dict(),
            "comparison": self.comparison.to_dict(),
        }


class ProtocolRunner:
    """Run protocol sessions from scripts.

    Each call to ``run`` builds a fresh ledger and state machine, so sessions
    never share state.

    Example:
        >>> runner = ProtocolRunner(ScenarioConfig())
        >>> result = runner.run(MI_MAC_SCRIPT)
        >>> result.ledger.packets_sent
        5
    """

    def __init__(self, scenario: ScenarioConfig | None = None, sink: EventSink | None = None):
        """Initialize the runner.

        Args:
            scenario: Scenario parameters; defaults if None.
            sink: Event consumer; events are discarded if None.
        """
        self.scenario = scenario or ScenarioConfig()
        self.sink = sink or NullSink()
        self.energy_model: EnergyModel = self.scenario.energy_model()

    def run(self, script: SessionScript) -> SessionResult:
        """Run one complete session.

        Args:
            script: Session script to interpret.

        Returns:
            SessionResult with the populated ledger.

        Raises:
            EmptySelectionInput: If the script uses coils and no readings are
                configured. Raised before any step runs.
            ProtocolGraphViolation: If a move breaks the graph or the session
                ends with a role outside IDLE.
            ValueError: If a hold phase has no configured duration.
        """
        log = session_logger(script.name)

        selected: CoilReading | None = None
        if script.uses_coils:
            selected = select_best_coil(self.scenario.coil_readings)

        ledger = EnergyLedger()
        machine = ProtocolStateMachine(script.graph, ledger)
        result = SessionResult(variant=script.name, ledger=ledger, selected_coil=selected)

        self.sink.emit(SessionStarted(variant=script.name, title=script.title))
        log.debug(f"Running {len(script.steps)} steps")

        for step in script.steps:
            if isinstance(step, Move):
                event = machine.transition(step.role, step.to, step.reason)
                result.transitions.append(event)
                result.timeline.append(event)
                self.sink.emit(event)
            elif isinstance(step, Hold):
                units = self.scenario.hold_units(script.name, step.phase)
                state = machine.current_state(step.role)
                self.energy_model.charge_state(ledger, state, units)
            elif isinstance(step, Send):
                for coil in self._coils_for(step, selected):
                    self._send(step, coil, ledger, result)
            elif isinstance(step, SelectCoil):
                self.sink.emit(
                    CoilSelected(selected=selected, readings=tuple(self.scenario.coil_readings))
                )
            else:
                raise TypeError(f"Unknown session step: {step!r}")

        if not machine.all_idle():
            role = next(r for r in machine.roles if machine.current_state(r) is not NodeState.IDLE)
            raise ProtocolGraphViolation(
                role.name, machine.current_state(role).label, "IDLE", "session ended"
            )

        self.sink.emit(
            SessionCompleted(
                variant=script.name,
                total_energy_uj=ledger.total_energy_uj,
                state_transitions=ledger.state_transitions,
                packets_sent=ledger.packets_sent,
            )
        )
        log_metrics(
            log,
            {
                "energy_uj": ledger.total_energy_uj,
                "transitions": ledger.state_transitions,
                "packets": ledger.packets_sent,
            },
            prefix="Session complete",
        )
        return result

    def _coils_for(self, step: Send, selected: CoilReading | None) -> list[Coil | None]:
        if step.coil_mode is CoilMode.SWEEP:
            return [reading.coil for reading in self.scenario.coil_readings]
        if step.coil_mode is CoilMode.BEST:
            return [selected.coil if selected is not None else None]
        return [None]

    def _send(
        self, step: Send, coil: Coil | None, ledger: EnergyLedger, result: SessionResult
    ) -> None:
        energy = self.energy_model.charge_transmit(ledger, step.packet_type)
        event = PacketSendEvent(
            packet_type=step.packet_type,
            size_bytes=self.energy_model.catalog.size_bytes(step.packet_type),
            sender=step.sender,
            receiver=step.sender.peer,
            coil=coil,
            energy_uj=energy,
        )
        result.packets.append(event)
        result.timeline.append(event)
        self.sink.emit(event)


def run_comparison(
    scenario: ScenarioConfig | None = None,
    sink: EventSink | None = None,
) -> ComparisonReport:
    """Run MI-MAC then CSMA/CA and compare their ledgers.

    Args:
        scenario: Scenario parameters; defaults if None.
        sink: Event consumer; also receives the final ComparisonResult.

    Returns:
        ComparisonReport with both sessions and the comparison.
    """
    runner = ProtocolRunner(scenario, sink)
    mi_mac = runner.run(MI_MAC_SCRIPT)
    csma_ca = runner.run(CSMA_CA_SCRIPT)

    comparison = compare_ledgers(mi_mac.ledger, csma_ca.ledger)
    runner.sink.emit(comparison)
    return ComparisonReport(mi_mac=mi_mac, csma_ca=csma_ca, comparison=comparison)
