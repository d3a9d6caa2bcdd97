"""Order maintenance endpoints — coordinate normalization."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from printroute.adapters.persistence.database import get_session
from printroute.adapters.persistence.repositories import commit
from printroute.application.use_cases.normalize_coordinates import NormalizeCoordinatesUseCase
from printroute.domain.entities.actor import Actor
from printroute.domain.errors import StoreFailure
from printroute.infrastructure.api.dependencies import get_normalize_uc, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/normalize-coordinates")
async def normalize_coordinates(
    _admin: Actor = Depends(require_admin),
    normalize_uc: NormalizeCoordinatesUseCase = Depends(get_normalize_uc),
    session: AsyncSession = Depends(get_session),
):
    """Fill in latitude/longitude for every order that is missing one."""
    try:
        report = await normalize_uc.execute()
        await commit(session)
    except StoreFailure:
        logger.exception("Coordinate normalization aborted")
        raise HTTPException(status_code=503, detail="Storage unavailable")

    return {
        "status": "ok",
        "scanned": report.scanned,
        "updated": report.updated,
        "geocoded": report.geocoded,
        "skipped": report.skipped,
        "failed": len(report.failed),
        "failures": [{"order_id": f.key, "error": f.reason} for f in report.failed],
    }
