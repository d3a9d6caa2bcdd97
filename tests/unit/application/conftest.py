"""In-memory fakes for the application ports."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from printroute.application.ports.assignment_repo import (
    AssignmentDetail,
    AssignmentRepository,
)
from printroute.application.ports.geocoder_port import GeocoderPort
from printroute.application.ports.order_repo import OrderRepository
from printroute.application.ports.print_center_repo import PrintCenterRepository
from printroute.domain.entities.assignment import Assignment
from printroute.domain.entities.order import Order
from printroute.domain.entities.print_center import PrintCenter
from printroute.domain.errors import DuplicateAssignment, StoreFailure
from printroute.domain.value_objects.enums import AssignmentStatus, OrderStatus
from printroute.domain.value_objects.geo_point import GeoPoint

LONG_AGO = datetime(2025, 1, 1, tzinfo=timezone.utc)


# ─── Shared in-memory store ─────────────────────────────────────────


class InMemoryStore:
    """Rows shared by all fake repositories, like one database."""

    def __init__(self):
        self.orders: dict[str, Order] = {}
        self.centers: dict[int, PrintCenter] = {}
        self.assignments: dict[int, Assignment] = {}
        self.fail_coordinates_for: set[str] = set()
        self.fail_assignment_for: set[str] = set()
        # Coordinates another writer stores between our scan and our write
        self.concurrent_coordinates: dict[str, GeoPoint] = {}
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def add_center(self, name: str, is_active: bool = True) -> PrintCenter:
        center = PrintCenter(id=len(self.centers) + 1, name=name, is_active=is_active)
        self.centers[center.id] = center
        return center

    def add_order(
        self,
        order_id: str,
        status: OrderStatus = OrderStatus.PAID,
        latitude: float | None = 30.05,
        longitude: float | None = 31.24,
        address: str | None = "5 Qasr El Nil St, Cairo",
    ) -> Order:
        self._clock += timedelta(minutes=1)
        order = Order(
            id=order_id,
            status=status,
            total=Decimal("75.50"),
            address=address,
            customer_id="customer-1",
            latitude=latitude,
            longitude=longitude,
            created_at=self._clock,
        )
        self.orders[order_id] = order
        return order

    def add_assignment(
        self,
        order_id: str,
        center_id: int,
        status: AssignmentStatus = AssignmentStatus.PENDING,
    ) -> Assignment:
        assignment = Assignment(
            id=len(self.assignments) + 1,
            order_id=order_id,
            print_center_id=center_id,
            status=status,
            created_at=LONG_AGO,
            updated_at=LONG_AGO,
        )
        self.assignments[assignment.id] = assignment
        return assignment

    def assignment_for(self, order_id: str) -> Assignment | None:
        return next((a for a in self.assignments.values() if a.order_id == order_id), None)


# ─── Fake repositories ──────────────────────────────────────────────


class FakeOrderRepo(OrderRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, order_id):
        o = self._store.orders.get(order_id)
        return Order(**vars(o)) if o else None

    async def find_by_id_prefix(self, prefix):
        matches = [o for o in self._store.orders.values() if o.id.startswith(prefix)]
        return min(matches, key=lambda o: (o.created_at, o.id)) if matches else None

    async def get_unassigned_paid(self):
        rows = [
            Order(**vars(o))
            for o in sorted(self._store.orders.values(), key=lambda o: (o.created_at, o.id))
            if o.status == OrderStatus.PAID and self._store.assignment_for(o.id) is None
        ]
        # Yield after reading so concurrent runs see the same snapshot
        await asyncio.sleep(0)
        return rows

    async def get_missing_coordinates(self):
        return [
            Order(**vars(o))
            for o in self._store.orders.values()
            if o.latitude is None or o.longitude is None
        ]

    async def set_coordinates(self, order_id, point):
        if order_id in self._store.fail_coordinates_for:
            raise StoreFailure(f"Coordinate update for order {order_id} failed")
        order = self._store.orders[order_id]
        racer = self._store.concurrent_coordinates.pop(order_id, None)
        if racer is not None:
            order.latitude, order.longitude = racer.latitude, racer.longitude
        if order.has_coordinates():
            return False
        order.latitude = point.latitude
        order.longitude = point.longitude
        return True


class FakeCenterRepo(PrintCenterRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, center_id):
        return self._store.centers.get(center_id)

    async def list_eligible(self):
        return [c for c in self._store.centers.values() if c.is_active]


class FakeAssignmentRepo(AssignmentRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.stale_next_write = False

    async def create(self, assignment):
        if assignment.order_id in self._store.fail_assignment_for:
            raise StoreFailure(f"Assignment insert for order {assignment.order_id} failed")
        if self._store.assignment_for(assignment.order_id) is not None:
            raise DuplicateAssignment(assignment.order_id)
        now = datetime.now(timezone.utc)
        assignment.id = len(self._store.assignments) + 1
        assignment.created_at = now
        assignment.updated_at = now
        self._store.assignments[assignment.id] = assignment
        return Assignment(**vars(assignment))

    async def get_by_id(self, assignment_id):
        a = self._store.assignments.get(assignment_id)
        return Assignment(**vars(a)) if a else None

    async def get_by_order(self, order_id):
        a = self._store.assignment_for(order_id)
        return Assignment(**vars(a)) if a else None

    def _detail(self, a: Assignment) -> AssignmentDetail:
        order = self._store.orders[a.order_id]
        return AssignmentDetail(
            assignment=Assignment(**vars(a)),
            print_center_name=self._store.centers[a.print_center_id].name,
            order_address=order.address,
            order_latitude=order.latitude,
            order_longitude=order.longitude,
            order_total=order.total,
        )

    async def get_detail(self, assignment_id):
        a = self._store.assignments.get(assignment_id)
        return self._detail(a) if a else None

    async def list_details(self, *, status=None, print_center_id=None, offset=0, limit=10):
        rows = [
            a for a in sorted(self._store.assignments.values(), key=lambda a: -a.id)
            if (status is None or a.status == status)
            and (print_center_id is None or a.print_center_id == print_center_id)
        ]
        return [self._detail(a) for a in rows[offset:offset + limit]], len(rows)

    async def compare_and_set_status(self, assignment_id, expected, new, *, notes=None, now):
        a = self._store.assignments.get(assignment_id)
        if self.stale_next_write and a is not None:
            # Someone else moved the row between our read and our write
            self.stale_next_write = False
            a.status = AssignmentStatus.CANCELLED
        if a is None or a.status != expected:
            return None
        a.status = new
        a.updated_at = now
        if notes is not None:
            a.notes = notes
        if new == AssignmentStatus.DELIVERED:
            a.completed_at = now
        return Assignment(**vars(a))

    async def reassign_all(self, print_center_id, *, now):
        for a in self._store.assignments.values():
            a.print_center_id = print_center_id
            a.updated_at = now
        return len(self._store.assignments)


class FakeGeocoder(GeocoderPort):
    def __init__(self, result: GeoPoint | None = None):
        self._result = result
        self.calls: list[str] = []

    async def geocode(self, address):
        self.calls.append(address)
        return self._result


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def order_repo(store):
    return FakeOrderRepo(store)


@pytest.fixture
def center_repo(store):
    return FakeCenterRepo(store)


@pytest.fixture
def assignment_repo(store):
    return FakeAssignmentRepo(store)


@pytest.fixture
def make_geocoder():
    return FakeGeocoder
