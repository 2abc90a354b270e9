"""
Application status lifecycle.

The allowed edges are declared in one table:

    pending  -> reviewed | accepted | rejected | withdrawn
    reviewed -> accepted | rejected | withdrawn
    accepted, rejected, withdrawn -> (terminal)

Nothing here touches the database.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from .models import Application

Status = Application.ApplicationStatus

# Side-effect step names, in execution order
NOTIFICATION = 'notification'
LEDGER = 'ledger'
JOB_STATUS = 'job_status'
COUNTERS = 'counters'
STATS = 'stats'

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    Status.PENDING: frozenset({Status.REVIEWED, Status.ACCEPTED, Status.REJECTED, Status.WITHDRAWN}),
    Status.REVIEWED: frozenset({Status.ACCEPTED, Status.REJECTED, Status.WITHDRAWN}),
    Status.ACCEPTED: frozenset(),
    Status.REJECTED: frozenset(),
    Status.WITHDRAWN: frozenset(),
}

SIDE_EFFECTS: Dict[str, Tuple[str, ...]] = {
    Status.REVIEWED: (NOTIFICATION,),
    Status.ACCEPTED: (NOTIFICATION, LEDGER, JOB_STATUS, COUNTERS, STATS),
    Status.REJECTED: (NOTIFICATION, COUNTERS, STATS),
    Status.WITHDRAWN: (),
}


@dataclass(frozen=True)
class TransitionDecision:
    """Outcome of validating a requested status change."""
    allowed: bool
    reason: Optional[str] = None
    side_effects: Tuple[str, ...] = field(default_factory=tuple)


class TransitionValidator:
    """Checks a requested status against the lifecycle table."""

    statuses = frozenset(Status.values)

    def validate(self, current: str, requested: str) -> TransitionDecision:
        if requested not in self.statuses:
            return TransitionDecision(False, f"Unknown status '{requested}'.")

        if current not in self.statuses:
            return TransitionDecision(False, f"Unknown current status '{current}'.")

        if current == requested:
            return TransitionDecision(False, f"Application is already {current}.")

        if requested == Status.PENDING:
            return TransitionDecision(False, "Applications cannot return to pending.")

        if not ALLOWED_TRANSITIONS[current]:
            return TransitionDecision(False, f"Application is already {current} and cannot change.")

        if requested not in ALLOWED_TRANSITIONS[current]:
            return TransitionDecision(False, f"Cannot move from {current} to {requested}.")

        return TransitionDecision(True, side_effects=SIDE_EFFECTS[requested])
