"""Injectable sinks for per-attempt generation diagnostics."""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from keysmith.core.constraints import Constraint

logger = logging.getLogger(__name__)


def compare_length(length: int, max_length: int) -> str:
    """Render how a candidate length relates to the maximum."""
    if length < max_length:
        return "<"
    if length > max_length:
        return ">"
    return "=="


class Diagnostics(Protocol):
    """Receives the outcome of every sampling attempt."""

    def accepted(self, attempt: int, candidate: str) -> None:
        """Called once for the accepted candidate."""
        ...

    def rejected(
        self,
        attempt: int,
        candidate: str,
        max_length: int,
        checks: list[tuple[Constraint, bool]],
    ) -> None:
        """Called when a finished candidate fails length or constraint checks."""
        ...

    def aborted(self, attempt: int, candidate: str, reason: str) -> None:
        """Called when the letter-picking strategy gave up mid-attempt."""
        ...


class NullDiagnostics:
    """Diagnostics sink that discards everything."""

    def accepted(self, attempt: int, candidate: str) -> None:
        pass

    def rejected(
        self,
        attempt: int,
        candidate: str,
        max_length: int,
        checks: list[tuple[Constraint, bool]],
    ) -> None:
        pass

    def aborted(self, attempt: int, candidate: str, reason: str) -> None:
        pass


class LoggingDiagnostics:
    """Writes attempt outcomes to a logger at DEBUG level."""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger

    def accepted(self, attempt: int, candidate: str) -> None:
        self.log.debug("Accepted candidate on attempt %d", attempt)

    def rejected(
        self,
        attempt: int,
        candidate: str,
        max_length: int,
        checks: list[tuple[Constraint, bool]],
    ) -> None:
        self.log.debug(
            "Rejecting %s: %d %s %d and %s",
            candidate,
            len(candidate),
            compare_length(len(candidate), max_length),
            max_length,
            [(str(c), ok) for c, ok in checks],
        )

    def aborted(self, attempt: int, candidate: str, reason: str) -> None:
        self.log.debug("Abandoning attempt %d at %r: %s", attempt, candidate, reason)


@dataclass
class AttemptEvent:
    """One recorded attempt outcome."""

    attempt: int
    outcome: str  # "accepted", "rejected" or "aborted"
    candidate: str
    checks: list[tuple[Constraint, bool]] = field(default_factory=list)
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the event to a plain dictionary."""
        return {
            "attempt": self.attempt,
            "outcome": self.outcome,
            "candidate": self.candidate,
            "length": len(self.candidate),
            "checks": {str(c): ok for c, ok in self.checks},
            "reason": self.reason,
        }


class RecordingDiagnostics:
    """Keeps every attempt outcome in memory for later inspection."""

    def __init__(self) -> None:
        self.events: list[AttemptEvent] = []

    def accepted(self, attempt: int, candidate: str) -> None:
        self.events.append(AttemptEvent(attempt, "accepted", candidate))

    def rejected(
        self,
        attempt: int,
        candidate: str,
        max_length: int,
        checks: list[tuple[Constraint, bool]],
    ) -> None:
        self.events.append(AttemptEvent(attempt, "rejected", candidate, list(checks)))

    def aborted(self, attempt: int, candidate: str, reason: str) -> None:
        self.events.append(AttemptEvent(attempt, "aborted", candidate, reason=reason))

    def count(self, outcome: str) -> int:
        """Number of recorded events with the given outcome."""
        return sum(1 for e in self.events if e.outcome == outcome)

    def clear(self) -> None:
        self.events.clear()
