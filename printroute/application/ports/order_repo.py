"""Port interface for order reads and coordinate writes."""

from abc import ABC, abstractmethod

from printroute.domain.entities.order import Order
from printroute.domain.value_objects.geo_point import GeoPoint


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: str) -> Order | None:
        ...

    @abstractmethod
    async def find_by_id_prefix(self, prefix: str) -> Order | None:
        """Return the earliest order whose id starts with *prefix*."""
        ...

    @abstractmethod
    async def get_unassigned_paid(self) -> list[Order]:
        """Return PAID orders without an assignment, in creation order."""
        ...

    @abstractmethod
    async def get_missing_coordinates(self) -> list[Order]:
        """Return orders whose latitude or longitude is null."""
        ...

    @abstractmethod
    async def set_coordinates(self, order_id: str, point: GeoPoint) -> bool:
        """Fill coordinates only while one is still null; True if the row was written."""
        ...
