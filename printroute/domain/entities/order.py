"""Order entity — a customer order placed by the external order system."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from printroute.domain.value_objects.enums import OrderStatus
from printroute.domain.value_objects.geo_point import GeoPoint


@dataclass
class Order:
    id: str
    status: OrderStatus
    total: Decimal
    address: str | None
    customer_id: str | None
    latitude: float | None = None
    longitude: float | None = None
    created_at: datetime | None = None

    @property
    def location(self) -> GeoPoint | None:
        return GeoPoint.from_nullable(self.latitude, self.longitude)

    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def is_paid(self) -> bool:
        return self.status == OrderStatus.PAID
