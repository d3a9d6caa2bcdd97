"""HTTP client wired to the in-memory database."""

import pytest
from httpx import ASGITransport, AsyncClient

from printroute.adapters.persistence.database import get_session
from printroute.main import create_app


@pytest.fixture
async def client(session_factory):
    app = create_app()

    async def _override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def world(seed_db):
    """Two centers, one admin, one staff member of the first center, two paid orders."""
    center_ids = await seed_db(
        centers=[("Dokki Print Hub", True), ("Maadi Print Hub", True)],
        orders=[
            ("940b0963-5d1e-4c2a-9f4b-6f1a2b3c4d5e", "PAID", None, None),
            ("b2c4e6f8-1111-2222-3333-444455556666", "PAID", 30.06, 31.22),
            ("c0ffee00-0000-0000-0000-000000000000", "CREATED", None, None),
        ],
        staff=[
            ("admin-1", "ADMIN", None),
            ("staff-dokki", "PRINT_CENTER", 0),
            ("staff-maadi", "PRINT_CENTER", 1),
        ],
    )
    return center_ids
