"""Assignment endpoints — admin batch tools, staff lifecycle updates, inspection."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from printroute.adapters.persistence.database import get_session
from printroute.adapters.persistence.repositories import commit
from printroute.application.ports.assignment_repo import AssignmentDetail
from printroute.application.use_cases.assign_orders import (
    AssignUnassignedOrdersUseCase,
    ReassignAllUseCase,
)
from printroute.application.use_cases.inspect_assignments import InspectAssignmentsUseCase
from printroute.application.use_cases.transition_assignment import TransitionAssignmentUseCase
from printroute.domain.entities.actor import Actor
from printroute.domain.entities.assignment import Assignment
from printroute.domain.errors import (
    FulfillmentError,
    InvalidTransition,
    NotAuthorized,
    NotFound,
    StoreFailure,
)
from printroute.domain.value_objects.enums import AssignmentStatus
from printroute.infrastructure.api.dependencies import (
    get_assign_uc,
    get_current_actor,
    get_inspect_uc,
    get_reassign_uc,
    get_transition_uc,
    require_admin,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignments", tags=["assignments"])


# ── Request schemas ─────────────────────────────────────────────────


class StatusUpdateRequest(BaseModel):
    status: AssignmentStatus
    expected_status: AssignmentStatus | None = None
    notes: str | None = Field(default=None, max_length=500)


class ReassignRequest(BaseModel):
    print_center_id: int


# ── Admin batch tools ───────────────────────────────────────────────


@router.post("/assign")
async def assign_unassigned_orders(
    _admin: Actor = Depends(require_admin),
    assign_uc: AssignUnassignedOrdersUseCase = Depends(get_assign_uc),
    session: AsyncSession = Depends(get_session),
):
    """Assign every unassigned PAID order to the first eligible print center."""
    try:
        report = await assign_uc.execute()
        await commit(session)
    except StoreFailure:
        logger.exception("Assignment run aborted")
        raise HTTPException(status_code=503, detail="Storage unavailable")

    return {
        "status": "ok",
        "no_eligible_centers": report.no_eligible_centers,
        "created": len(report.created),
        "skipped": len(report.skipped),
        "failed": len(report.failures),
        "assignments": [_serialize_assignment(a) for a in report.created],
        "failures": [{"order_id": f.key, "error": f.reason} for f in report.failures],
    }


@router.post("/reassign")
async def reassign_all(
    body: ReassignRequest,
    _admin: Actor = Depends(require_admin),
    reassign_uc: ReassignAllUseCase = Depends(get_reassign_uc),
    session: AsyncSession = Depends(get_session),
):
    """Point every assignment at one print center (repair tool)."""
    try:
        count = await reassign_uc.execute(body.print_center_id)
        await commit(session)
    except FulfillmentError as e:
        raise _to_http(e)
    return {"status": "ok", "updated": count, "print_center_id": body.print_center_id}


# ── Inspection ──────────────────────────────────────────────────────


@router.get("")
async def list_assignments(
    status: AssignmentStatus | None = None,
    print_center_id: int | None = None,
    page: int = Query(default=1),
    limit: int = Query(default=10),
    actor: Actor = Depends(get_current_actor),
    inspect_uc: InspectAssignmentsUseCase = Depends(get_inspect_uc),
):
    """Admin: all assignments. Print center staff: own center only."""
    try:
        result = await inspect_uc.list_assignments(
            actor,
            status=status,
            print_center_id=print_center_id,
            page=page,
            limit=limit,
        )
    except FulfillmentError as e:
        raise _to_http(e)

    return {
        "total": result.total,
        "page": result.page,
        "limit": result.limit,
        "total_pages": result.total_pages,
        "assignments": [_serialize_detail(d) for d in result.items],
    }


@router.get("/{assignment_id}")
async def get_assignment(
    assignment_id: int,
    actor: Actor = Depends(get_current_actor),
    inspect_uc: InspectAssignmentsUseCase = Depends(get_inspect_uc),
):
    try:
        detail = await inspect_uc.get_assignment(assignment_id, actor)
    except FulfillmentError as e:
        raise _to_http(e)
    return _serialize_detail(detail)


# ── Lifecycle ───────────────────────────────────────────────────────


@router.patch("/{assignment_id}/status")
async def update_status(
    assignment_id: int,
    body: StatusUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    transition_uc: TransitionAssignmentUseCase = Depends(get_transition_uc),
    session: AsyncSession = Depends(get_session),
):
    """Move an assignment one step along its lifecycle (print center staff)."""
    try:
        updated = await transition_uc.execute(
            assignment_id,
            body.status,
            actor,
            expected_status=body.expected_status,
            notes=body.notes,
        )
        await commit(session)
    except FulfillmentError as e:
        raise _to_http(e)
    return {"status": "ok", "assignment": _serialize_assignment(updated)}


# ── Helpers ─────────────────────────────────────────────────────────


def _to_http(e: FulfillmentError) -> HTTPException:
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, NotAuthorized):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, InvalidTransition):
        return HTTPException(status_code=409, detail=str(e))
    logger.error("Unhandled engine error: %s", e)
    return HTTPException(status_code=503, detail="Storage unavailable")


def _serialize_assignment(a: Assignment) -> dict:
    return {
        "id": a.id,
        "order_id": a.order_id,
        "print_center_id": a.print_center_id,
        "status": a.status.value,
        "notes": a.notes,
        "created_at": a.created_at.isoformat() if a.created_at else None,
        "updated_at": a.updated_at.isoformat() if a.updated_at else None,
        "completed_at": a.completed_at.isoformat() if a.completed_at else None,
    }


def _serialize_detail(d: AssignmentDetail) -> dict:
    data = _serialize_assignment(d.assignment)
    data["print_center_name"] = d.print_center_name
    data["order"] = {
        "address": d.order_address,
        "latitude": d.order_latitude,
        "longitude": d.order_longitude,
        "total": str(d.order_total),
    }
    return data
