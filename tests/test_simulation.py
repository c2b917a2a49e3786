"""Tests for session scripts, the protocol runner and the comparison entry point."""

from __future__ import annotations

import dataclasses

import pytest

from mimac.protocol import (
    Coil,
    CoilReading,
    EmptySelectionInput,
    NodeState,
    PacketType,
    ProtocolGraphViolation,
    Role,
)
from mimac.protocol.machine import TransitionEvent
from mimac.simulation import (
    CSMA_CA_SCRIPT,
    MI_MAC_SCRIPT,
    CoilMode,
    CoilSelected,
    Hold,
    Move,
    PacketSendEvent,
    ProtocolRunner,
    RecordingSink,
    ScenarioConfig,
    Send,
    SessionCompleted,
    SessionScript,
    SessionStarted,
    run_comparison,
)

MI_MAC_TOTAL_UJ = 11183.84
CSMA_CA_TOTAL_UJ = 14058.40
ENERGY_SAVING_PERCENT = 20.4472770728


class TestSessionScripts:
    """Tests for the static session scripts."""

    @pytest.mark.parametrize("script", [MI_MAC_SCRIPT, CSMA_CA_SCRIPT])
    def test_moves_match_graph_edges(self, script):
        """Test each role's moves walk exactly its graph path."""
        for role in Role:
            moves = [s.to for s in script.steps if isinstance(s, Move) and s.role is role]
            assert tuple([NodeState.IDLE, *moves]) == script.graph.path(role)

    @pytest.mark.parametrize("script", [MI_MAC_SCRIPT, CSMA_CA_SCRIPT])
    def test_hold_phases_configured(self, script, scenario):
        """Test every hold phase has a default duration."""
        assert script.hold_phases == set(scenario.holds[script.name])

    def test_coil_usage(self):
        """Test only MI-MAC depends on coil selection."""
        assert MI_MAC_SCRIPT.uses_coils
        assert not CSMA_CA_SCRIPT.uses_coils


class TestMIMACSession:
    """Tests for a complete MI-MAC session."""

    @pytest.fixture
    def result(self, runner):
        return runner.run(MI_MAC_SCRIPT)

    def test_counts(self, result):
        """Test 3 REV + ACK + DATA and one transition per graph edge."""
        assert result.ledger.packets_sent == 5
        assert result.ledger.state_transitions == MI_MAC_SCRIPT.graph.edge_count()
        assert result.ledger.state_transitions == 12
        assert len(result.transitions) == 12

    def test_total_energy(self, result):
        """Test the reproducible session energy."""
        assert result.ledger.total_energy_uj == pytest.approx(MI_MAC_TOTAL_UJ)

    def test_breakdown(self, result):
        """Test energy per category."""
        breakdown = result.ledger.breakdown

        assert breakdown["state:DATA_ACQUIRE"] == pytest.approx(2500.0)
        assert breakdown["state:CHANNEL_SENSING"] == pytest.approx(2200.0)
        assert breakdown["state:RECEIVE"] == pytest.approx(6000.0)
        assert breakdown["tx:REV"] == pytest.approx(3 * 116.48)
        assert sum(breakdown.values()) == pytest.approx(result.ledger.total_energy_uj)

    def test_selected_coil(self, result):
        """Test coil X wins with the default readings."""
        assert result.selected_coil == CoilReading(Coil.X, -45.5)

    def test_packet_sequence(self, result):
        """Test REV sweeps all coils, then ACK and DATA use the best coil."""
        sent = [(p.packet_type, p.sender, p.coil) for p in result.packets]

        assert sent == [
            (PacketType.REV, Role.INITIATOR, Coil.X),
            (PacketType.REV, Role.INITIATOR, Coil.Y),
            (PacketType.REV, Role.INITIATOR, Coil.Z),
            (PacketType.ACK, Role.RESPONDER, Coil.X),
            (PacketType.DATA, Role.INITIATOR, Coil.X),
        ]
        assert result.packets[3].receiver is Role.INITIATOR
        assert result.packets[4].size_bytes == 10

    def test_event_stream(self, result, sink):
        """Test events are emitted in session order."""
        assert isinstance(sink.events[0], SessionStarted)
        assert isinstance(sink.events[-1], SessionCompleted)
        assert len(sink.of_type(TransitionEvent)) == 12
        assert len(sink.of_type(PacketSendEvent)) == 5

        selection = sink.of_type(CoilSelected)
        assert len(selection) == 1
        assert selection[0].selected.coil is Coil.X
        assert len(selection[0].readings) == 3

    def test_to_frame(self, result):
        """Test the event log DataFrame."""
        frame = result.to_frame()

        assert len(frame) == 12 + 5
        assert set(frame["kind"]) == {"transition", "packet"}
        assert frame["energy_uj"].sum() == pytest.approx(sum(p.energy_uj for p in result.packets))

    def test_to_frame_keeps_session_order(self, result, sink):
        """Test the REV sweep follows the initiator's move to TRANSMIT."""
        frame = result.to_frame()

        assert list(frame["kind"][:6]) == ["transition"] * 3 + ["packet"] * 3
        assert frame["detail"][2] == "CHANNEL_SENSING->TRANSMIT"
        assert list(frame["detail"][3:6]) == ["REV"] * 3
        assert list(frame["reason"][3:6]) == ["X", "Y", "Z"]

        emitted = [e for e in sink.events if isinstance(e, (TransitionEvent, PacketSendEvent))]
        assert result.timeline == emitted


class TestCSMACASession:
    """Tests for a complete CSMA/CA session."""

    @pytest.fixture
    def result(self, runner):
        return runner.run(CSMA_CA_SCRIPT)

    def test_counts(self, result):
        """Test RTS, CTS, DATA, ACK and one transition per graph edge."""
        assert result.ledger.packets_sent == 4
        assert result.ledger.state_transitions == CSMA_CA_SCRIPT.graph.edge_count()
        assert result.ledger.state_transitions == 13

    def test_total_energy(self, result):
        """Test the reproducible session energy."""
        assert result.ledger.total_energy_uj == pytest.approx(CSMA_CA_TOTAL_UJ)

    def test_no_coils(self, result, sink):
        """Test CSMA/CA neither selects nor uses coils."""
        assert result.selected_coil is None
        assert all(p.coil is None for p in result.packets)
        assert sink.of_type(CoilSelected) == []

    def test_packet_order(self, result):
        """Test the four-way handshake order."""
        assert [p.packet_type for p in result.packets] == [
            PacketType.RTS,
            PacketType.CTS,
            PacketType.DATA,
            PacketType.ACK,
        ]


class TestRunnerErrors:
    """Tests for fatal session errors."""

    def test_empty_coil_readings(self, sink):
        """Test empty readings abort before the session starts."""
        runner = ProtocolRunner(ScenarioConfig(coil_readings=()), sink)

        with pytest.raises(EmptySelectionInput):
            runner.run(MI_MAC_SCRIPT)
        assert sink.events == []

    def test_empty_coil_readings_do_not_affect_csma(self):
        """Test a variant without coils runs without readings."""
        runner = ProtocolRunner(ScenarioConfig(coil_readings=()))

        assert runner.run(CSMA_CA_SCRIPT).ledger.packets_sent == 4

    def test_illegal_move_aborts(self):
        """Test a script breaking its graph raises."""
        broken = dataclasses.replace(
            MI_MAC_SCRIPT,
            steps=(Move(Role.INITIATOR, NodeState.TRANSMIT, "Skip ahead"),),
        )

        with pytest.raises(ProtocolGraphViolation):
            ProtocolRunner().run(broken)

    def test_session_must_end_idle(self):
        """Test a session ending outside IDLE raises."""
        unfinished = SessionScript(
            name="mi_mac",
            title="Unfinished",
            graph=MI_MAC_SCRIPT.graph,
            steps=(Move(Role.RESPONDER, NodeState.RECEIVE, "REV received"),),
        )

        with pytest.raises(ProtocolGraphViolation) as exc_info:
            ProtocolRunner().run(unfinished)
        assert exc_info.value.role == "RESPONDER"

    def test_missing_hold_duration(self):
        """Test an unconfigured hold phase raises."""
        script = dataclasses.replace(
            CSMA_CA_SCRIPT,
            steps=(Hold(Role.INITIATOR, "nap"),),
        )

        with pytest.raises(ValueError, match="csma_ca.nap"):
            ProtocolRunner().run(script)


class TestCustomScenario:
    """Tests for injected scenario parameters."""

    def test_alternate_readings(self):
        """Test a stronger Z coil is used for ACK and DATA."""
        scenario = ScenarioConfig(
            coil_readings=(
                CoilReading(Coil.X, -70.0),
                CoilReading(Coil.Y, -60.0),
                CoilReading(Coil.Z, -41.0),
            )
        )
        result = ProtocolRunner(scenario).run(MI_MAC_SCRIPT)

        assert result.selected_coil.coil is Coil.Z
        assert [p.coil for p in result.packets[3:]] == [Coil.Z, Coil.Z]

    def test_two_coil_sweep(self):
        """Test REV is sent once per configured coil."""
        scenario = ScenarioConfig(
            coil_readings=(CoilReading(Coil.X, -50.0), CoilReading(Coil.Y, -49.0))
        )
        result = ProtocolRunner(scenario).run(MI_MAC_SCRIPT)

        assert result.ledger.packets_sent == 4

    def test_sessions_do_not_share_state(self, runner):
        """Test repeated runs produce identical, independent ledgers."""
        first = runner.run(MI_MAC_SCRIPT)
        second = runner.run(MI_MAC_SCRIPT)

        assert first.ledger is not second.ledger
        assert first.ledger.to_dict() == second.ledger.to_dict()

    def test_coil_mode_values(self):
        """Test sends default to no coil."""
        assert Send(PacketType.RTS, Role.INITIATOR).coil_mode is CoilMode.NONE


class TestRunComparison:
    """Tests for the comparison entry point."""

    def test_default_comparison(self):
        """Test MI-MAC saves energy against CSMA/CA."""
        report = run_comparison()

        assert report.mi_mac.ledger.total_energy_uj == pytest.approx(MI_MAC_TOTAL_UJ)
        assert report.csma_ca.ledger.total_energy_uj == pytest.approx(CSMA_CA_TOTAL_UJ)
        assert report.comparison.energy_saving_percent > 0
        assert report.comparison.energy_saving_percent == pytest.approx(ENERGY_SAVING_PERCENT)
        assert report.comparison.packet_delta == 1
        assert report.comparison.transition_delta == -1
        assert report.mi_mac.selected_coil.coil is Coil.X

    def test_comparison_is_last_event(self):
        """Test the sink receives both sessions, then the comparison."""
        sink = RecordingSink()
        report = run_comparison(sink=sink)

        started = sink.of_type(SessionStarted)
        assert [s.variant for s in started] == ["mi_mac", "csma_ca"]
        assert sink.events[-1] is report.comparison

    def test_to_dict(self):
        """Test the report serializes to plain data."""
        data = run_comparison().to_dict()

        assert data["mi_mac"]["selected_coil"] == "X"
        assert data["csma_ca"]["ledger"]["packets_sent"] == 4
        assert data["comparison"]["packet_delta"] == 1
