"""SQLAlchemy repository implementations."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from printroute.adapters.persistence.models import (
    AssignmentModel,
    OrderModel,
    PrintCenterModel,
    StaffMemberModel,
)
from printroute.application.ports.assignment_repo import (
    AssignmentDetail,
    AssignmentRepository,
)
from printroute.application.ports.order_repo import OrderRepository
from printroute.application.ports.print_center_repo import PrintCenterRepository
from printroute.application.ports.staff_directory import StaffDirectory
from printroute.domain.entities.actor import Actor
from printroute.domain.entities.assignment import Assignment
from printroute.domain.entities.order import Order
from printroute.domain.entities.print_center import PrintCenter
from printroute.domain.errors import DuplicateAssignment, StoreFailure
from printroute.domain.value_objects.enums import (
    AssignmentStatus,
    OrderStatus,
    StaffRole,
)
from printroute.domain.value_objects.geo_point import GeoPoint


@contextmanager
def _store_errors(action: str):
    """Re-raise driver/ORM errors as StoreFailure."""
    try:
        yield
    except SQLAlchemyError as e:
        raise StoreFailure(f"{action} failed ({e.__class__.__name__})") from e


async def commit(session: AsyncSession) -> None:
    """Commit the unit of work, reporting driver errors as StoreFailure."""
    with _store_errors("Commit"):
        await session.commit()


# ─── Mappers ─────────────────────────────────────────────────────────


def _order_to_domain(m: OrderModel) -> Order:
    return Order(
        id=m.id,
        status=OrderStatus(m.status),
        total=m.total,
        address=m.address,
        customer_id=m.customer_id,
        latitude=m.latitude,
        longitude=m.longitude,
        created_at=m.created_at,
    )


def _center_to_domain(m: PrintCenterModel) -> PrintCenter:
    return PrintCenter(
        id=m.id,
        name=m.name,
        is_active=m.is_active,
        address=m.address,
        created_at=m.created_at,
    )


def _assignment_to_domain(m: AssignmentModel) -> Assignment:
    return Assignment(
        id=m.id,
        order_id=m.order_id,
        print_center_id=m.print_center_id,
        status=AssignmentStatus(m.status),
        notes=m.notes,
        created_at=m.created_at,
        updated_at=m.updated_at,
        completed_at=m.completed_at,
    )


def _detail_to_domain(
    a: AssignmentModel, o: OrderModel, c: PrintCenterModel
) -> AssignmentDetail:
    return AssignmentDetail(
        assignment=_assignment_to_domain(a),
        print_center_name=c.name,
        order_address=o.address,
        order_latitude=o.latitude,
        order_longitude=o.longitude,
        order_total=o.total,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, order_id: str) -> Order | None:
        with _store_errors("Order lookup"):
            m = await self._s.get(OrderModel, order_id, populate_existing=True)
        return _order_to_domain(m) if m else None

    async def find_by_id_prefix(self, prefix: str) -> Order | None:
        with _store_errors("Order prefix lookup"):
            result = await self._s.execute(
                select(OrderModel)
                .where(OrderModel.id.startswith(prefix, autoescape=True))
                .order_by(OrderModel.created_at, OrderModel.id)
                .limit(1)
            )
            m = result.scalar_one_or_none()
        return _order_to_domain(m) if m else None

    async def get_unassigned_paid(self) -> list[Order]:
        with _store_errors("Unassigned order scan"):
            result = await self._s.execute(
                select(OrderModel)
                .outerjoin(AssignmentModel, AssignmentModel.order_id == OrderModel.id)
                .where(
                    OrderModel.status == OrderStatus.PAID.value,
                    AssignmentModel.id.is_(None),
                )
                .order_by(OrderModel.created_at, OrderModel.id)
            )
            return [_order_to_domain(m) for m in result.scalars()]

    async def get_missing_coordinates(self) -> list[Order]:
        with _store_errors("Coordinate scan"):
            result = await self._s.execute(
                select(OrderModel)
                .where(or_(OrderModel.latitude.is_(None), OrderModel.longitude.is_(None)))
                .order_by(OrderModel.created_at, OrderModel.id)
            )
            return [_order_to_domain(m) for m in result.scalars()]

    async def set_coordinates(self, order_id: str, point: GeoPoint) -> bool:
        with _store_errors(f"Coordinate update for order {order_id}"):
            async with self._s.begin_nested():
                result = await self._s.execute(
                    update(OrderModel)
                    .where(
                        OrderModel.id == order_id,
                        or_(OrderModel.latitude.is_(None), OrderModel.longitude.is_(None)),
                    )
                    .values(latitude=point.latitude, longitude=point.longitude)
                    .execution_options(synchronize_session=False)
                )
        return result.rowcount == 1


class SqlPrintCenterRepository(PrintCenterRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, center_id: int) -> PrintCenter | None:
        with _store_errors("Print center lookup"):
            m = await self._s.get(PrintCenterModel, center_id)
        return _center_to_domain(m) if m else None

    async def list_eligible(self) -> list[PrintCenter]:
        with _store_errors("Print center scan"):
            result = await self._s.execute(
                select(PrintCenterModel)
                .where(PrintCenterModel.is_active.is_(True))
                .order_by(PrintCenterModel.created_at, PrintCenterModel.id)
            )
            return [_center_to_domain(m) for m in result.scalars()]


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def create(self, assignment: Assignment) -> Assignment:
        now = datetime.now(timezone.utc)
        m = AssignmentModel(
            order_id=assignment.order_id,
            print_center_id=assignment.print_center_id,
            status=assignment.status.value,
            notes=assignment.notes,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self._s.begin_nested():
                self._s.add(m)
                await self._s.flush()
        except IntegrityError as e:
            # Unique order_id is the at-most-one guard; anything else is a real failure
            if await self.get_by_order(assignment.order_id) is not None:
                raise DuplicateAssignment(assignment.order_id) from e
            raise StoreFailure(
                f"Assignment insert for order {assignment.order_id} failed (IntegrityError)"
            ) from e
        except SQLAlchemyError as e:
            raise StoreFailure(
                f"Assignment insert for order {assignment.order_id} failed ({e.__class__.__name__})"
            ) from e

        assignment.id = m.id
        assignment.created_at = now
        assignment.updated_at = now
        return assignment

    async def get_by_id(self, assignment_id: int) -> Assignment | None:
        with _store_errors("Assignment lookup"):
            m = await self._s.get(AssignmentModel, assignment_id)
        return _assignment_to_domain(m) if m else None

    async def get_by_order(self, order_id: str) -> Assignment | None:
        with _store_errors("Assignment lookup by order"):
            result = await self._s.execute(
                select(AssignmentModel).where(AssignmentModel.order_id == order_id)
            )
            m = result.scalar_one_or_none()
        return _assignment_to_domain(m) if m else None

    async def get_detail(self, assignment_id: int) -> AssignmentDetail | None:
        with _store_errors("Assignment detail lookup"):
            result = await self._s.execute(
                select(AssignmentModel, OrderModel, PrintCenterModel)
                .join(OrderModel, AssignmentModel.order_id == OrderModel.id)
                .join(PrintCenterModel, AssignmentModel.print_center_id == PrintCenterModel.id)
                .where(AssignmentModel.id == assignment_id)
                .execution_options(populate_existing=True)
            )
            row = result.one_or_none()
        return _detail_to_domain(*row) if row else None

    async def list_details(
        self,
        *,
        status: AssignmentStatus | None = None,
        print_center_id: int | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[AssignmentDetail], int]:
        filters = []
        if status is not None:
            filters.append(AssignmentModel.status == status.value)
        if print_center_id is not None:
            filters.append(AssignmentModel.print_center_id == print_center_id)

        with _store_errors("Assignment listing"):
            total = (
                await self._s.execute(
                    select(func.count(AssignmentModel.id)).where(*filters)
                )
            ).scalar() or 0
            result = await self._s.execute(
                select(AssignmentModel, OrderModel, PrintCenterModel)
                .join(OrderModel, AssignmentModel.order_id == OrderModel.id)
                .join(PrintCenterModel, AssignmentModel.print_center_id == PrintCenterModel.id)
                .where(*filters)
                .order_by(AssignmentModel.created_at.desc(), AssignmentModel.id.desc())
                .offset(offset)
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            items = [_detail_to_domain(a, o, c) for a, o, c in result.all()]
        return items, total

    async def compare_and_set_status(
        self,
        assignment_id: int,
        expected: AssignmentStatus,
        new: AssignmentStatus,
        *,
        notes: str | None = None,
        now: datetime,
    ) -> Assignment | None:
        values: dict = {"status": new.value, "updated_at": now}
        if notes is not None:
            values["notes"] = notes
        if new == AssignmentStatus.DELIVERED:
            values["completed_at"] = now

        with _store_errors(f"Status update for assignment {assignment_id}"):
            result = await self._s.execute(
                update(AssignmentModel)
                .where(
                    AssignmentModel.id == assignment_id,
                    AssignmentModel.status == expected.value,
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                return None
            m = await self._s.get(AssignmentModel, assignment_id, populate_existing=True)
        return _assignment_to_domain(m) if m else None

    async def reassign_all(self, print_center_id: int, *, now: datetime) -> int:
        with _store_errors("Bulk reassignment"):
            result = await self._s.execute(
                update(AssignmentModel)
                .values(print_center_id=print_center_id, updated_at=now)
                .execution_options(synchronize_session=False)
            )
        return result.rowcount


class SqlStaffDirectory(StaffDirectory):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def resolve(self, user_id: str) -> Actor | None:
        with _store_errors("Staff lookup"):
            result = await self._s.execute(
                select(StaffMemberModel).where(StaffMemberModel.user_id == user_id)
            )
            m = result.scalar_one_or_none()
        if m is None:
            return None
        return Actor(
            user_id=m.user_id,
            role=StaffRole(m.role),
            print_center_id=m.print_center_id,
        )
