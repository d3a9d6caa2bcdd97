"""FulfillmentLifecycle — legal status transitions of an assignment."""

from __future__ import annotations

from printroute.domain.errors import InvalidTransition
from printroute.domain.value_objects.enums import AssignmentStatus

INITIAL_STATUS = AssignmentStatus.PENDING

TERMINAL_STATUSES: frozenset[AssignmentStatus] = frozenset(
    {AssignmentStatus.DELIVERED, AssignmentStatus.CANCELLED}
)

# Forward edges only; CANCELLED is reachable from every non-terminal state.
_TRANSITIONS: dict[AssignmentStatus, frozenset[AssignmentStatus]] = {
    AssignmentStatus.PENDING: frozenset(
        {AssignmentStatus.PRINTING, AssignmentStatus.CANCELLED}
    ),
    AssignmentStatus.PRINTING: frozenset(
        {AssignmentStatus.READY, AssignmentStatus.CANCELLED}
    ),
    AssignmentStatus.READY: frozenset(
        {AssignmentStatus.DELIVERED, AssignmentStatus.CANCELLED}
    ),
    AssignmentStatus.DELIVERED: frozenset(),
    AssignmentStatus.CANCELLED: frozenset(),
}


def allowed_transitions(status: AssignmentStatus) -> frozenset[AssignmentStatus]:
    return _TRANSITIONS[status]


def is_terminal(status: AssignmentStatus) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current: AssignmentStatus, target: AssignmentStatus) -> bool:
    return target in _TRANSITIONS[current]


def ensure_transition(current: AssignmentStatus, target: AssignmentStatus) -> None:
    """Raise InvalidTransition unless *current → target* is an edge of the graph."""
    if is_terminal(current):
        raise InvalidTransition(
            f"Assignment is {current.value}; no further transitions are allowed"
        )
    if not can_transition(current, target):
        raise InvalidTransition(
            f"Cannot move assignment from {current.value} to {target.value}"
        )
