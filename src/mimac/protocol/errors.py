"""Error taxonomy for protocol sessions."""

from __future__ import annotations


class MacError(Exception):
    """Base class for all protocol modeling errors."""


class ProtocolGraphViolation(MacError):
    """A transition was requested from a state the graph does not allow.

    This indicates a defect in a transition graph or session script, not bad
    input data, and aborts the current session.
    """

    def __init__(self, role: str, current: str, target: str, reason: str = ""):
        self.role = role
        self.current = current
        self.target = target
        self.reason = reason
        message = f"{role}: illegal transition {current} -> {target}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class EmptySelectionInput(MacError):
    """Coil selection was invoked with no readings."""


class DegenerateComparison(MacError):
    """Baseline energy is zero, so a relative saving is undefined."""
