"""Test fixtures for the Staybook backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.pop("SMTP_HOST", None)
os.environ.pop("SMTP_PORT", None)

from staybook.core.security import ADMIN_ROLE, create_access_token, get_password_hash

ADMIN_PASSWORD = "Adm1nPass!"
os.environ["ADMIN_PASSWORD_HASH"] = get_password_hash(ADMIN_PASSWORD)

from staybook.core.config import get_settings
from staybook.db.base import Base
from staybook.db.session import Database
from staybook.main import app
from staybook.models import Accommodation, AccommodationType, Partner


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def database(db_url: str) -> AsyncIterator[Database]:
    """Yield a database handle on a freshly recreated schema."""
    handle = Database(db_url)
    async with handle.engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    yield handle
    await handle.dispose()


async def seed_partner(session, *, name: str = "Atlantic Stays") -> Partner:
    partner = Partner(
        name=name,
        email="owner@atlantic-stays.example",
        phone="+237677000000",
        address="Route de la plage, Kribi",
        active=True,
    )
    session.add(partner)
    await session.commit()
    await session.refresh(partner)
    return partner


async def seed_accommodation(
    session,
    *,
    partner: Partner | None = None,
    name: str = "Villa Ocean",
    slug: str = "villa-ocean",
    price_per_night: int = 50_000,
    commission_rate: Decimal = Decimal("10"),
    capacity: int = 4,
) -> Accommodation:
    if partner is None:
        partner = await seed_partner(session)
    accommodation = Accommodation(
        partner=partner,
        name=name,
        slug=slug,
        accommodation_type=AccommodationType.VILLA,
        capacity=capacity,
        bedrooms=2,
        bathrooms=1,
        price_per_night=price_per_night,
        commission_rate=commission_rate,
        location="Kribi",
        images=[],
        amenities=["wifi"],
    )
    session.add(accommodation)
    await session.commit()
    await session.refresh(accommodation)
    return accommodation


@pytest.fixture()
def make_accommodation():
    """Return the accommodation seeding helper."""
    return seed_accommodation


@pytest.fixture()
def make_partner():
    """Return the partner seeding helper."""
    return seed_partner


@pytest_asyncio.fixture()
async def app_context(database: Database) -> AsyncIterator[dict[str, object]]:
    """Yield an async client, an admin token and a seeded accommodation."""
    async with database.sessionmaker() as session:
        accommodation = await seed_accommodation(session)
        context: dict[str, object] = {
            "accommodation_id": accommodation.id,
            "accommodation_slug": accommodation.slug,
            "partner_id": accommodation.partner_id,
            "admin_email": get_settings().admin_email,
            "admin_password": ADMIN_PASSWORD,
            "admin_headers": {
                "Authorization": "Bearer "
                + create_access_token(get_settings().admin_email, role=ADMIN_ROLE)
            },
        }

    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
    del app.state.database
