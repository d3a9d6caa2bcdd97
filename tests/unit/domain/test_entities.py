"""Tests for domain entities."""

from decimal import Decimal

from printroute.domain.entities.actor import Actor
from printroute.domain.entities.order import Order
from printroute.domain.value_objects.enums import OrderStatus, StaffRole
from printroute.domain.value_objects.geo_point import GeoPoint


def _order(status=OrderStatus.PAID, latitude=None, longitude=None) -> Order:
    return Order(
        id="ord-1", status=status, total=Decimal("50.00"),
        address="12 Tahrir Square, Cairo", customer_id="c-1",
        latitude=latitude, longitude=longitude,
    )


def test_order_location_full():
    o = _order(latitude=30.0, longitude=31.0)
    assert o.has_coordinates()
    assert o.location == GeoPoint(30.0, 31.0)


def test_order_location_half_missing():
    o = _order(latitude=30.0)
    assert not o.has_coordinates()
    assert o.location is None


def test_order_is_paid():
    assert _order().is_paid()
    assert not _order(status=OrderStatus.CREATED).is_paid()
    assert not _order(status=OrderStatus.REFUNDED).is_paid()


def test_actor_admin():
    admin = Actor(user_id="a", role=StaffRole.ADMIN)
    assert admin.is_admin()
    assert not admin.is_staff_of(1)


def test_actor_staff_of_own_center_only():
    staff = Actor(user_id="s", role=StaffRole.PRINT_CENTER, print_center_id=3)
    assert staff.is_staff_of(3)
    assert not staff.is_staff_of(4)
    assert not staff.is_admin()


def test_actor_staff_without_center():
    orphan = Actor(user_id="s", role=StaffRole.PRINT_CENTER)
    assert not orphan.is_staff_of(1)
