"""Console rendering of session events and comparison reports."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table

from mimac.energy.hardware import CurrentProfile
from mimac.evaluation.comparison import ComparisonResult
from mimac.protocol.states import NodeState
from mimac.simulation.events import SessionStarted, describe_event
from mimac.simulation.runner import ComparisonReport, SessionResult


class ConsoleReportSink:
    """Sink that narrates each event on a rich console.

    Comparison results are rendered by ``render_report`` instead of being
    narrated line by line.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def emit(self, event: Any) -> None:
        if isinstance(event, ComparisonResult):
            return
        if isinstance(event, SessionStarted):
            self.console.rule(f"[bold]{event.title}")
            return
        self.console.print(describe_event(event), markup=False, highlight=False)


def comparison_table(report: ComparisonReport) -> Table:
    """Side-by-side metrics of a ComparisonReport."""
    table = Table(title="Protocol Comparison")
    table.add_column("Metric")
    table.add_column("Multi-Coil MI", justify="right")
    table.add_column("CSMA/CA", justify="right")

    mi, cs = report.mi_mac.ledger, report.csma_ca.ledger
    table.add_row("Total Packets Sent", str(mi.packets_sent), str(cs.packets_sent))
    table.add_row("State Transitions", str(mi.state_transitions), str(cs.state_transitions))
    table.add_row(
        "Total Energy (uJ)", f"{mi.total_energy_uj:.2f}", f"{cs.total_energy_uj:.2f}"
    )
    return table


def current_table(profile: CurrentProfile) -> Table:
    """Per-state current draw used by the energy model."""
    table = Table(title="Current Consumption per State")
    table.add_column("State")
    table.add_column("Current (uA)", justify="right")
    for state in NodeState:
        table.add_row(state.label, f"{profile.current(state):g}")
    return table


def render_report(
    report: ComparisonReport,
    profile: CurrentProfile,
    console: Console | None = None,
) -> None:
    """Print the comparison table, the energy saving and the current table."""
    console = console or Console()
    console.print(comparison_table(report))

    comparison = report.comparison
    if comparison.applicable:
        console.print(f"Energy saving of MI-MAC: {comparison.energy_saving_percent:.1f}%")
    else:
        console.print("Energy saving of MI-MAC: n/a (baseline consumed no energy)")
    if report.mi_mac.selected_coil is not None:
        best = report.mi_mac.selected_coil
        console.print(f"Selected coil: {best.coil.label} (RSSI = {best.rssi_dbm} dBm)")
    console.print(current_table(profile))


def session_table(result: SessionResult) -> Table:
    """Energy breakdown of a single session, one row per ledger category."""
    ledger = result.ledger
    table = Table(title=f"{result.variant} Session")
    table.add_column("Category")
    table.add_column("Energy (uJ)", justify="right")
    for category, energy in ledger.breakdown.items():
        table.add_row(category, f"{energy:.2f}")
    table.add_section()
    table.add_row("Total", f"{ledger.total_energy_uj:.2f}")
    table.add_row("Packets Sent", str(ledger.packets_sent))
    table.add_row("State Transitions", str(ledger.state_transitions))
    return table


def render_session(
    result: SessionResult,
    profile: CurrentProfile,
    console: Console | None = None,
) -> None:
    """Print a single-session summary without a baseline comparison."""
    console = console or Console()
    console.print(session_table(result))
    if result.selected_coil is not None:
        best = result.selected_coil
        console.print(f"Selected coil: {best.coil.label} (RSSI = {best.rssi_dbm} dBm)")
    console.print(current_table(profile))
