"""InspectAssignmentsUseCase — operator views over existing assignments."""

from __future__ import annotations

from dataclasses import dataclass

from printroute.application.ports.assignment_repo import (
    AssignmentDetail,
    AssignmentRepository,
)
from printroute.domain.entities.actor import Actor
from printroute.domain.errors import NotAuthorized, NotFound
from printroute.domain.value_objects.enums import AssignmentStatus

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class AssignmentPage:
    items: list[AssignmentDetail]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.total else 0


def clamp_pagination(page: int | None, limit: int | None) -> tuple[int, int]:
    page = max(1, 1 if page is None else page)
    limit = DEFAULT_PAGE_SIZE if limit is None else limit
    limit = min(MAX_PAGE_SIZE, max(1, limit))
    return page, limit


class InspectAssignmentsUseCase:
    """Admins see everything; print center staff see their own center only."""

    def __init__(self, assignment_repo: AssignmentRepository):
        self._assignments = assignment_repo

    async def list_assignments(
        self,
        actor: Actor,
        *,
        status: AssignmentStatus | None = None,
        print_center_id: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> AssignmentPage:
        if actor.is_admin():
            scope = print_center_id
        elif actor.print_center_id is not None:
            scope = actor.print_center_id
        else:
            raise NotAuthorized("Print center access required")

        page, limit = clamp_pagination(page, limit)
        items, total = await self._assignments.list_details(
            status=status,
            print_center_id=scope,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return AssignmentPage(items=items, page=page, limit=limit, total=total)

    async def get_assignment(self, assignment_id: int, actor: Actor) -> AssignmentDetail:
        detail = await self._assignments.get_detail(assignment_id)
        if detail is None:
            raise NotFound(f"Assignment {assignment_id} not found")
        # Other centers must not learn that the assignment exists
        if not actor.is_admin() and not actor.is_staff_of(detail.assignment.print_center_id):
            raise NotFound(f"Assignment {assignment_id} not found")
        return detail
