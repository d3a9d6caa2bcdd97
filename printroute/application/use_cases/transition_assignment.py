"""TransitionAssignmentUseCase — advance an assignment through its lifecycle."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from printroute.application.ports.assignment_repo import AssignmentRepository
from printroute.domain.entities.actor import Actor
from printroute.domain.entities.assignment import Assignment
from printroute.domain.errors import NotAuthorized, NotFound, StaleTransition
from printroute.domain.policies.lifecycle import ensure_transition
from printroute.domain.value_objects.enums import AssignmentStatus

logger = logging.getLogger(__name__)


class TransitionAssignmentUseCase:
    """Validates and applies one operator-driven status change."""

    def __init__(self, assignment_repo: AssignmentRepository):
        self._assignments = assignment_repo

    async def execute(
        self,
        assignment_id: int,
        target: AssignmentStatus,
        actor: Actor,
        *,
        expected_status: AssignmentStatus | None = None,
        notes: str | None = None,
    ) -> Assignment:
        """Move an assignment to *target*.

        Args:
            assignment_id: DB id of the assignment.
            target: requested status.
            actor: caller, must be staff of the assignment's current center.
            expected_status: status the caller based its decision on, if any.
            notes: optional operator notes stored with the change.

        Raises:
            NotFound: assignment does not exist.
            NotAuthorized: actor is not staff of the assigned center.
            InvalidTransition: target is not adjacent to the current status.
            StaleTransition: stored status changed under the caller.
        """
        assignment = await self._assignments.get_by_id(assignment_id)
        if assignment is None:
            raise NotFound(f"Assignment {assignment_id} not found")

        if not actor.is_staff_of(assignment.print_center_id):
            raise NotAuthorized("You can only update your own center's assignments")

        current = assignment.status
        if expected_status is not None and expected_status != current:
            raise StaleTransition(
                f"Assignment is {current.value}, expected {expected_status.value}"
            )

        ensure_transition(current, target)

        updated = await self._assignments.compare_and_set_status(
            assignment_id,
            current,
            target,
            notes=notes,
            now=datetime.now(timezone.utc),
        )
        if updated is None:
            raise StaleTransition(
                f"Assignment {assignment_id} changed while moving {current.value} → {target.value}"
            )

        logger.info(
            "Assignment %d: %s → %s by %s",
            assignment_id, current.value, target.value, actor.user_id,
        )
        return updated
