"""Assignment entity — the link between one paid order and its print center."""

from dataclasses import dataclass
from datetime import datetime

from printroute.domain.value_objects.enums import AssignmentStatus


@dataclass
class Assignment:
    id: int | None
    order_id: str
    print_center_id: int
    status: AssignmentStatus = AssignmentStatus.PENDING
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None
