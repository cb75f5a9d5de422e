"""
Application status transition graph.

    applied   -> interview | rejected | withdrawn
    interview -> offer | rejected | withdrawn
    offer     -> withdrawn
    rejected  -> withdrawn
    withdrawn -> (none)

Only enforced when the ApplicationService runs in strict mode.
"""
from typing import Dict, FrozenSet

from core.applications.models import ApplicationStatus

S = ApplicationStatus

ALLOWED_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    S.APPLIED: frozenset({S.INTERVIEW, S.REJECTED, S.WITHDRAWN}),
    S.INTERVIEW: frozenset({S.OFFER, S.REJECTED, S.WITHDRAWN}),
    S.OFFER: frozenset({S.WITHDRAWN}),
    S.REJECTED: frozenset({S.WITHDRAWN}),
    S.WITHDRAWN: frozenset(),
}


def allowed_transitions(current: ApplicationStatus) -> FrozenSet[ApplicationStatus]:
    return ALLOWED_TRANSITIONS[current]


def is_transition_allowed(current: ApplicationStatus, new: ApplicationStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]
