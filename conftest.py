import pytest
import asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.deps import get_catalog
from app.core.config import settings
from app.data.reference import VEHICLE_CLASSES, DISTANCE_BANDS, EXTRA_SERVICES, generate_pricing_rates
from app.db.seed import seed_reference_data
from app.models.base import Base
from app.services.catalog import InMemoryPricingCatalog, SqlPricingCatalog
from app.services.pricing import PriceEstimator


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def reference_catalog():
    return InMemoryPricingCatalog.from_reference_data()


@pytest.fixture
def estimator(reference_catalog):
    return PriceEstimator(reference_catalog)


@pytest.fixture
def catalog_factory():
    """Build an in-memory catalog with some of the reference tables replaced"""
    def _build(**overrides):
        tables = {
            "vehicle_classes": VEHICLE_CLASSES,
            "distance_bands": DISTANCE_BANDS,
            "pricing_rates": generate_pricing_rates(),
            "extra_services": EXTRA_SERVICES,
        }
        tables.update(overrides)
        return InMemoryPricingCatalog(**tables)

    return _build


@pytest.fixture
def estimate_payload():
    def _payload(vehicle_class_id="mini-van", distance=3, **extra_services):
        payload = {"vehicleClassId": vehicle_class_id, "extraServices": extra_services}
        if distance is not None:
            payload["distance"] = distance
        return payload

    return _payload


@pytest.fixture
async def db_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded_session(db_session):
    await seed_reference_data(db_session)
    return db_session


@pytest.fixture
async def sql_catalog(seeded_session):
    return SqlPricingCatalog(seeded_session)


@pytest.fixture
async def test_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def test_client_with_db(sql_catalog):
    async def override_get_catalog():
        yield sql_catalog

    app.dependency_overrides[get_catalog] = override_get_catalog
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_catalog, None)


@pytest.fixture
def app_settings():
    """Return application settings"""
    return settings


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "catalog: marks tests related to the pricing catalog"
    )
    config.addinivalue_line(
        "markers", "geo: marks tests related to distance calculation"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)
