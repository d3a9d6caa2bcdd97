"""AssignOrdersUseCase — route unassigned paid orders to a print center."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from printroute.application.ports.assignment_repo import AssignmentRepository
from printroute.application.ports.order_repo import OrderRepository
from printroute.application.ports.print_center_repo import PrintCenterRepository
from printroute.application.use_cases.normalize_coordinates import (
    ItemFailure,
    NormalizeCoordinatesUseCase,
)
from printroute.domain.entities.assignment import Assignment
from printroute.domain.errors import (
    DuplicateAssignment,
    NoEligibleCenters,
    NotFound,
    StoreFailure,
)
from printroute.domain.policies.center_selection import select_first_center
from printroute.domain.policies.lifecycle import INITIAL_STATUS

logger = logging.getLogger(__name__)


@dataclass
class AssignmentReport:
    """Summary of one assignment run."""

    created: list[Assignment] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failures: list[ItemFailure] = field(default_factory=list)
    no_eligible_centers: bool = False

    @property
    def considered(self) -> int:
        return len(self.created) + len(self.skipped) + len(self.failures)


class AssignUnassignedOrdersUseCase:
    """Creates one PENDING assignment per unassigned PAID order."""

    def __init__(
        self,
        order_repo: OrderRepository,
        center_repo: PrintCenterRepository,
        assignment_repo: AssignmentRepository,
        normalizer: NormalizeCoordinatesUseCase,
    ):
        self._orders = order_repo
        self._centers = center_repo
        self._assignments = assignment_repo
        self._normalizer = normalizer

    async def execute(self) -> AssignmentReport:
        """Assign every eligible order to the first eligible center.

        Pipeline per order:
        1. Ensure the order has coordinates
        2. Create the assignment (unique per order)
        3. A concurrent duplicate is treated as already handled
        """
        report = AssignmentReport()

        centers = await self._centers.list_eligible()
        try:
            selection = select_first_center(centers)
        except NoEligibleCenters:
            logger.warning("No active print centers found, nothing assigned")
            report.no_eligible_centers = True
            return report

        orders = await self._orders.get_unassigned_paid()
        logger.info(
            "Assigning %d unassigned order(s) → %s", len(orders), selection.reason
        )

        for order in orders:
            try:
                await self._normalizer.ensure_coordinates(order)
                assignment = await self._assignments.create(
                    Assignment(
                        id=None,
                        order_id=order.id,
                        print_center_id=selection.center.id,
                        status=INITIAL_STATUS,
                    )
                )
            except DuplicateAssignment:
                logger.info("Order %s already assigned, skipping", order.id)
                report.skipped.append(order.id)
                continue
            except StoreFailure as e:
                logger.error("Could not assign order %s: %s", order.id, e)
                report.failures.append(ItemFailure(key=order.id, reason=str(e)))
                continue

            logger.info(
                "Order %s → %s (assignment %s)",
                order.id, selection.center.name, assignment.id,
            )
            report.created.append(assignment)

        logger.info(
            "Assignment run complete: %d created, %d skipped, %d failed",
            len(report.created), len(report.skipped), len(report.failures),
        )
        return report


class ReassignAllUseCase:
    """Administrative repair: move every assignment to one print center."""

    def __init__(
        self,
        center_repo: PrintCenterRepository,
        assignment_repo: AssignmentRepository,
    ):
        self._centers = center_repo
        self._assignments = assignment_repo

    async def execute(self, target_center_id: int) -> int:
        """Rewrite the print center of all assignments; return rows mutated.

        Statuses are left as they are, terminal ones included.
        """
        center = await self._centers.get_by_id(target_center_id)
        if center is None:
            raise NotFound(f"Print center {target_center_id} not found")
        if not center.is_active:
            logger.warning("Reassigning all assignments to inactive center %s", center.name)

        count = await self._assignments.reassign_all(
            center.id, now=datetime.now(timezone.utc)
        )
        logger.info("Reassigned %d assignment(s) to %s", count, center.name)
        return count
