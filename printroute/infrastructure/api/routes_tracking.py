"""Public order tracking — the one endpoint reachable without authentication."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from printroute.application.use_cases.track_order import TrackOrderUseCase, TrackingView
from printroute.domain.errors import NotFound, StoreFailure
from printroute.infrastructure.api.dependencies import get_track_uc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/track", tags=["tracking"])


@router.get("/{order_id}")
async def track_order(
    order_id: str,
    track_uc: TrackOrderUseCase = Depends(get_track_uc),
):
    """Track an order by full id or short id (e.g. ``#940b0963``)."""
    try:
        view = await track_uc.execute(order_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="No print assignment found for this order")
    except StoreFailure:
        logger.exception("Tracking lookup failed for '%s'", order_id)
        raise HTTPException(status_code=503, detail="Tracking temporarily unavailable")

    return _serialize_view(view)


def _serialize_view(v: TrackingView) -> dict:
    """Whitelist projection: every key here is public."""
    return {
        "order_id": v.order_id,
        "status": v.status.value,
        "print_center": {"name": v.print_center_name},
        "updated_at": v.updated_at.isoformat() if v.updated_at else None,
    }
