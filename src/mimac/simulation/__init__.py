"""Simulation module for mimac.

This module runs deterministic protocol sessions from data-driven scripts.
"""

from mimac.simulation.events import (
    CoilSelected,
    EventSink,
    LoggingSink,
    NullSink,
    PacketSendEvent,
    RecordingSink,
    SessionCompleted,
    SessionStarted,
    describe_event,
)
from mimac.simulation.scenario import ScenarioConfig
from mimac.simulation.scripts import (
    CSMA_CA_SCRIPT,
    MI_MAC_SCRIPT,
    SCRIPTS,
    CoilMode,
    Hold,
    Move,
    SelectCoil,
    Send,
    SessionScript,
)
from mimac.simulation.runner import (
    ComparisonReport,
    ProtocolRunner,
    SessionResult,
    run_comparison,
)

__all__ = [
    # Events
    "SessionStarted",
    "CoilSelected",
    "PacketSendEvent",
    "SessionCompleted",
    "EventSink",
    "NullSink",
    "RecordingSink",
    "LoggingSink",
    "describe_event",
    # Scenario
    "ScenarioConfig",
    # Scripts
    "CoilMode",
    "Move",
    "Hold",
    "Send",
    "SelectCoil",
    "SessionScript",
    "MI_MAC_SCRIPT",
    "CSMA_CA_SCRIPT",
    "SCRIPTS",
    # Runner
    "SessionResult",
    "ComparisonReport",
    "ProtocolRunner",
    "run_comparison",
]
