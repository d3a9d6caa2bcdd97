"""Port interface for assignment persistence."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from printroute.domain.entities.assignment import Assignment
from printroute.domain.value_objects.enums import AssignmentStatus


@dataclass
class AssignmentDetail:
    """Assignment joined with its order and print center, for operators."""

    assignment: Assignment
    print_center_name: str
    order_address: str | None
    order_latitude: float | None
    order_longitude: float | None
    order_total: Decimal


class AssignmentRepository(ABC):
    @abstractmethod
    async def create(self, assignment: Assignment) -> Assignment:
        """Insert a new assignment.

        Raises DuplicateAssignment when the order already has one.
        """
        ...

    @abstractmethod
    async def get_by_id(self, assignment_id: int) -> Assignment | None:
        ...

    @abstractmethod
    async def get_by_order(self, order_id: str) -> Assignment | None:
        ...

    @abstractmethod
    async def get_detail(self, assignment_id: int) -> AssignmentDetail | None:
        ...

    @abstractmethod
    async def list_details(
        self,
        *,
        status: AssignmentStatus | None = None,
        print_center_id: int | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[AssignmentDetail], int]:
        """Return one page of details (newest first) and the total count."""
        ...

    @abstractmethod
    async def compare_and_set_status(
        self,
        assignment_id: int,
        expected: AssignmentStatus,
        new: AssignmentStatus,
        *,
        notes: str | None = None,
        now: datetime,
    ) -> Assignment | None:
        """Atomically move *expected → new*.

        Returns the updated assignment, or None when the stored status no
        longer equals *expected*.
        """
        ...

    @abstractmethod
    async def reassign_all(self, print_center_id: int, *, now: datetime) -> int:
        """Point every assignment at *print_center_id*; return rows mutated."""
        ...
