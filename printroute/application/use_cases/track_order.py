"""TrackOrderUseCase — public, read-only projection of an order's fulfillment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from printroute.application.ports.assignment_repo import AssignmentRepository
from printroute.application.ports.order_repo import OrderRepository
from printroute.application.ports.print_center_repo import PrintCenterRepository
from printroute.domain.errors import NotFound
from printroute.domain.value_objects.enums import AssignmentStatus

SHORT_ID_MAX_LENGTH = 8


@dataclass(frozen=True)
class TrackingView:
    """Everything in here is public. Add fields with care."""

    order_id: str
    status: AssignmentStatus
    print_center_name: str
    updated_at: datetime | None


def normalize_tracking_key(raw: str) -> str:
    """Strip whitespace and leading '#' from a user-typed order reference."""
    return (raw or "").strip().lstrip("#").strip()


class TrackOrderUseCase:
    def __init__(
        self,
        order_repo: OrderRepository,
        center_repo: PrintCenterRepository,
        assignment_repo: AssignmentRepository,
    ):
        self._orders = order_repo
        self._centers = center_repo
        self._assignments = assignment_repo

    async def execute(self, order_ref: str) -> TrackingView:
        """Resolve a full order id or a short id prefix (e.g. ``940b0963``)."""
        key = normalize_tracking_key(order_ref)
        if not key:
            raise NotFound("No print assignment found for this order")

        assignment = await self._assignments.get_by_order(key)
        if assignment is None and await self._orders.get_by_id(key) is not None:
            # A known but unassigned order never falls through to a prefix match
            raise NotFound("No print assignment found for this order")
        if assignment is None and len(key) <= SHORT_ID_MAX_LENGTH and "-" not in key:
            order = await self._orders.find_by_id_prefix(key)
            if order is not None:
                assignment = await self._assignments.get_by_order(order.id)

        if assignment is None:
            raise NotFound("No print assignment found for this order")

        center = await self._centers.get_by_id(assignment.print_center_id)
        if center is None:
            raise NotFound("No print assignment found for this order")

        return TrackingView(
            order_id=assignment.order_id,
            status=assignment.status,
            print_center_name=center.name,
            updated_at=assignment.updated_at,
        )
