"""Step-by-step simulation results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence


class Status(Enum):
    """Outcome of a simulation run."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RejectReason(Enum):
    """Why a run was rejected.

    The boolean evaluators fold all of these into ``False``; a trace keeps
    them apart for callers that want to explain the verdict.
    """

    UNKNOWN_SYMBOL = "unknown_symbol"
    UNKNOWN_STATE = "unknown_state"
    NO_TRANSITION = "no_transition"
    NO_ACTIVE_STATES = "no_active_states"
    NOT_ACCEPTING = "not_accepting"


@dataclass(frozen=True)
class Step:
    """One consumed input symbol.

    Attributes:
        position: Index of the symbol in the input.
        symbol: The consumed symbol.
        source: Active states before the symbol was read.
        target: Active states after the symbol was read.
    """

    position: int
    symbol: str
    source: FrozenSet[str]
    target: FrozenSet[str]


@dataclass
class Trace:
    """Recorded run of an automaton over one input.

    For a DFA every state set holds exactly one name.
    """

    word: Sequence[str]
    initial: FrozenSet[str]
    steps: List[Step] = field(default_factory=list)
    status: Status = Status.REJECTED
    reason: Optional[RejectReason] = None
    # Position of the symbol that stopped the run early, if any.
    halted_at: Optional[int] = None

    @property
    def accepted(self) -> bool:
        return self.status == Status.ACCEPTED

    @property
    def final(self) -> FrozenSet[str]:
        """States active when the run ended."""
        if self.steps:
            return self.steps[-1].target
        return self.initial

    @property
    def consumed(self) -> int:
        return len(self.steps)

    @property
    def remaining(self) -> Sequence[str]:
        """The part of the input the run never read."""
        return self.word[self.consumed:]

    def halt(self, reason: RejectReason, position: int) -> "Trace":
        """Reject the run early at input ``position``."""
        self.status = Status.REJECTED
        self.reason = reason
        self.halted_at = position
        return self

    def finish(self, accepting: bool) -> "Trace":
        """Record the verdict after the whole input was consumed."""
        if accepting:
            self.status = Status.ACCEPTED
            self.reason = None
        else:
            self.status = Status.REJECTED
            self.reason = RejectReason.NOT_ACCEPTING
        return self

    def message(self) -> str:
        """Human-readable summary of the verdict."""
        final = _fmt(self.final)
        if self.accepted:
            return f"Input accepted in {final}"
        if self.reason == RejectReason.UNKNOWN_SYMBOL:
            symbol = self.word[self.halted_at]
            return f"Symbol {symbol!r} at position {self.halted_at} is not in the alphabet"
        if self.reason == RejectReason.UNKNOWN_STATE:
            return f"State {final} is not a declared state"
        if self.reason == RejectReason.NO_TRANSITION:
            return f"No transition from {final} on {self.word[self.halted_at]!r}"
        if self.reason == RejectReason.NO_ACTIVE_STATES:
            return f"No active states left after position {self.halted_at}"
        return f"Input rejected in {final}"


def _fmt(states: FrozenSet[str]) -> str:
    return "{" + ", ".join(sorted(str(s) for s in states)) + "}"
