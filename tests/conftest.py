"""Pytest configuration and shared fixtures.

SQL-backed tests run against in-memory SQLite through aiosqlite. The event
hooks hand transaction control to SQLAlchemy so SAVEPOINTs behave as they do
on PostgreSQL.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from printroute.adapters.persistence.database import Base
from printroute.adapters.persistence.models import (
    OrderModel,
    PrintCenterModel,
    StaffMemberModel,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

BASE_TIME = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed_db(session_factory):
    """Insert centers, staff and orders and commit; returns the center ids.

    centers: list of (name, is_active)
    orders: list of (id, status, latitude, longitude)
    staff: list of (user_id, role, center_index or None)
    """

    async def _seed(centers=(), orders=(), staff=()) -> list[int]:
        async with session_factory() as session:
            center_models = []
            for i, (name, active) in enumerate(centers):
                c = PrintCenterModel(
                    name=name,
                    is_active=active,
                    created_at=BASE_TIME + timedelta(minutes=i),
                )
                session.add(c)
                center_models.append(c)
            await session.flush()

            for i, (order_id, status, lat, lon) in enumerate(orders):
                session.add(
                    OrderModel(
                        id=order_id,
                        status=status,
                        total=Decimal("120.00"),
                        address="12 Tahrir Square, Cairo",
                        latitude=lat,
                        longitude=lon,
                        customer_id=f"customer-{i}",
                        created_at=BASE_TIME + timedelta(minutes=i),
                    )
                )

            for user_id, role, center_index in staff:
                session.add(
                    StaffMemberModel(
                        user_id=user_id,
                        role=role,
                        print_center_id=(
                            center_models[center_index].id if center_index is not None else None
                        ),
                    )
                )
            await session.commit()
            return [c.id for c in center_models]

    return _seed
