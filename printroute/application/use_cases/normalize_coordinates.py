"""NormalizeCoordinatesUseCase — make sure every order has a usable location."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from printroute.application.ports.geocoder_port import GeocoderPort
from printroute.application.ports.order_repo import OrderRepository
from printroute.domain.entities.order import Order
from printroute.domain.errors import StoreFailure
from printroute.domain.value_objects.geo_point import DEFAULT_CITY_CENTER, GeoPoint

logger = logging.getLogger(__name__)


@dataclass
class ItemFailure:
    """One item of a batch that could not be written."""

    key: str
    reason: str


@dataclass
class NormalizationReport:
    """Summary of one normalization pass."""

    scanned: int = 0
    updated: int = 0
    geocoded: int = 0
    skipped: int = 0
    failed: list[ItemFailure] = field(default_factory=list)


class NormalizeCoordinatesUseCase:
    """Fills in missing order coordinates, geocoding when possible.

    Orders that already carry both coordinates are never selected, so the
    pass is safe to re-run after a partial failure.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        geocoder: GeocoderPort | None = None,
        default_point: GeoPoint = DEFAULT_CITY_CENTER,
    ):
        self._orders = order_repo
        self._geocoder = geocoder
        self._default = default_point

    async def execute(self) -> NormalizationReport:
        """Run one idempotent pass over all orders missing a coordinate."""
        orders = await self._orders.get_missing_coordinates()
        report = NormalizationReport(scanned=len(orders))
        if not orders:
            logger.info("No orders need coordinates")
            return report

        logger.info("Normalizing coordinates for %d order(s)", len(orders))
        for order in orders:
            try:
                point, geocoded = await self._resolve(order)
                written = await self._orders.set_coordinates(order.id, point)
            except StoreFailure as e:
                logger.error("Could not store coordinates for order %s: %s", order.id, e)
                report.failed.append(ItemFailure(key=order.id, reason=str(e)))
                continue
            if not written:
                logger.info("Order %s got coordinates concurrently, skipping", order.id)
                report.skipped += 1
                continue
            report.updated += 1
            if geocoded:
                report.geocoded += 1

        logger.info(
            "Normalization complete: %d/%d updated (%d geocoded, %d skipped, %d failed)",
            report.updated, report.scanned, report.geocoded, report.skipped, len(report.failed),
        )
        return report

    async def ensure_coordinates(self, order: Order) -> Order:
        """Normalize a single order in place; no-op when it already has both."""
        if order.has_coordinates():
            return order
        point, _ = await self._resolve(order)
        if not await self._orders.set_coordinates(order.id, point):
            # Coordinates written by someone else win
            current = await self._orders.get_by_id(order.id)
            if current is not None:
                point = current.location or point
        order.latitude = point.latitude
        order.longitude = point.longitude
        return order

    async def _resolve(self, order: Order) -> tuple[GeoPoint, bool]:
        if self._geocoder is not None and order.address and order.address.strip():
            point = await self._geocoder.geocode(order.address)
            if point is not None:
                return point, True
            logger.warning("Order %s: geocoding failed, using default point", order.id)
        return self._default, False
