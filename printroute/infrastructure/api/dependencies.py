"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from printroute.adapters.geocoder.nominatim_adapter import NominatimAdapter
from printroute.adapters.persistence.database import get_session
from printroute.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlOrderRepository,
    SqlPrintCenterRepository,
    SqlStaffDirectory,
)
from printroute.application.ports.geocoder_port import GeocoderPort
from printroute.application.use_cases.assign_orders import (
    AssignUnassignedOrdersUseCase,
    ReassignAllUseCase,
)
from printroute.application.use_cases.inspect_assignments import InspectAssignmentsUseCase
from printroute.application.use_cases.normalize_coordinates import NormalizeCoordinatesUseCase
from printroute.application.use_cases.track_order import TrackOrderUseCase
from printroute.application.use_cases.transition_assignment import TransitionAssignmentUseCase
from printroute.config import settings
from printroute.domain.entities.actor import Actor
from printroute.domain.errors import StoreFailure
from printroute.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

# Re-export session dependency
get_db_session = get_session

# Singleton adapter (stateless apart from its cache)
_geocoder_adapter: GeocoderPort | None = None
if settings.geocoding_enabled:
    _geocoder_adapter = NominatimAdapter()
    logger.info("Using Nominatim for order geocoding")

_default_point = GeoPoint(
    latitude=settings.default_latitude,
    longitude=settings.default_longitude,
)


def build_normalizer(session: AsyncSession) -> NormalizeCoordinatesUseCase:
    return NormalizeCoordinatesUseCase(
        order_repo=SqlOrderRepository(session),
        geocoder=_geocoder_adapter,
        default_point=_default_point,
    )


def build_assign_uc(session: AsyncSession) -> AssignUnassignedOrdersUseCase:
    return AssignUnassignedOrdersUseCase(
        order_repo=SqlOrderRepository(session),
        center_repo=SqlPrintCenterRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
        normalizer=build_normalizer(session),
    )


def build_reassign_uc(session: AsyncSession) -> ReassignAllUseCase:
    return ReassignAllUseCase(
        center_repo=SqlPrintCenterRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


def get_normalize_uc(
    session: AsyncSession = Depends(get_session),
) -> NormalizeCoordinatesUseCase:
    return build_normalizer(session)


def get_assign_uc(
    session: AsyncSession = Depends(get_session),
) -> AssignUnassignedOrdersUseCase:
    return build_assign_uc(session)


def get_reassign_uc(
    session: AsyncSession = Depends(get_session),
) -> ReassignAllUseCase:
    return build_reassign_uc(session)


def get_transition_uc(
    session: AsyncSession = Depends(get_session),
) -> TransitionAssignmentUseCase:
    return TransitionAssignmentUseCase(assignment_repo=SqlAssignmentRepository(session))


def get_inspect_uc(
    session: AsyncSession = Depends(get_session),
) -> InspectAssignmentsUseCase:
    return InspectAssignmentsUseCase(assignment_repo=SqlAssignmentRepository(session))


def get_track_uc(session: AsyncSession = Depends(get_session)) -> TrackOrderUseCase:
    return TrackOrderUseCase(
        order_repo=SqlOrderRepository(session),
        center_repo=SqlPrintCenterRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


async def get_current_actor(
    x_user_id: str | None = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> Actor:
    """Resolve the caller authenticated upstream (X-User-Id) via the staff directory."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        actor = await SqlStaffDirectory(session).resolve(x_user_id)
    except StoreFailure:
        logger.exception("Staff directory unavailable")
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")
    if actor is None:
        raise HTTPException(status_code=403, detail="Staff access required")
    return actor


async def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.is_admin():
        raise HTTPException(status_code=403, detail="Admin access required")
    return actor
