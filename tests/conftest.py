import os
import tempfile
from decimal import Decimal
from pathlib import Path

# must be set before backend.config is imported
_DB_DIR = tempfile.mkdtemp(prefix="worldcities-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ["SEED_TEST_DATA"] = "false"
os.environ["RESET_DATABASE"] = "false"

import httpx
import pytest

from backend.database import create_tables, delete_tables, engine, new_session
from backend.main import app
from backend.models.city import CityOrm
from backend.models.country import CountryOrm
from client.services.backend_client import BackendClient


@pytest.fixture
async def db():
    await delete_tables()
    await create_tables()
    yield
    await engine.dispose()


@pytest.fixture
async def seeded(db):
    """Japan(1): Tokyo(1), Osaka(3); Italy(2): Rome(2)."""
    async with new_session() as session:
        session.add_all([
            CountryOrm(id=1, name="Japan", iso2="JP", iso3="JPN"),
            CountryOrm(id=2, name="Italy", iso2="IT", iso3="ITA"),
        ])
        await session.flush()
        session.add_all([
            CityOrm(id=1, name="Tokyo", lat=Decimal("35.6897"), lon=Decimal("139.6922"), country_id=1),
            CityOrm(id=2, name="Rome", lat=Decimal("41.8931"), lon=Decimal("12.4828"), country_id=2),
            CityOrm(id=3, name="Osaka", lat=Decimal("34.6936"), lon=Decimal("135.5019"), country_id=1),
        ])
        await session.commit()
    return {"japan": 1, "italy": 2, "tokyo": 1, "rome": 2, "osaka": 3}


@pytest.fixture
async def api(db):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def backend(api):
    return BackendClient(api)
