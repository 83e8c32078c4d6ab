"""Shared test fixtures - uses async SQLite for isolated testing."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:TEST-TOKEN")
os.environ.setdefault("DEV_AUTH", "true")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from gamelive.db.database import Base, get_db  # noqa: E402
from gamelive.models.character import Character  # noqa: E402
from gamelive.models.user import User  # noqa: E402
from gamelive.services.asset_catalog import AssetCatalog, get_asset_catalog  # noqa: E402

# In-memory SQLite for tests (no Docker needed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///file::memory:?cache=shared&uri=true"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
test_session_factory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)

TEST_CATALOG = AssetCatalog(
    hair=frozenset({"hair_short", "hair_long"}),
    top=frozenset({"top_tshirt"}),
    bottom=frozenset({"bottom_jeans"}),
    shoes=frozenset({"shoes_sneakers"}),
)

CHARACTER_PAYLOAD = {
    "name": "Aria",
    "age": 27,
    "height_cm": 168,
    "weight_kg": 60,
    "hair_style": "hair_short",
    "hair_color": "hair_long",
    "outfit_top": "top_tshirt",
    "outfit_bottom": "bottom_jeans",
    "outfit_shoes": "shoes_sneakers",
}


async def _override_get_db():
    async with test_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@pytest.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after."""
    # Import all models so Base.metadata knows about them
    import gamelive.models  # noqa: F401

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db():
    """Direct async DB session for service-level tests."""
    async with test_session_factory() as session:
        yield session
        await session.commit()


@pytest.fixture
async def owner(db) -> User:
    """A user that already has a character."""
    user = User(telegram_id=42, username="hero", first_name="Hero")
    db.add(user)
    await db.flush()
    db.add(Character(user_id=user.id, **CHARACTER_PAYLOAD))
    await db.commit()
    return user


@pytest.fixture
async def client():
    """Async HTTP test client with test DB and catalog overrides."""
    from gamelive.main import app

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_asset_catalog] = lambda: TEST_CATALOG
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(client):
    """HTTP client logged in as the development user."""
    resp = await client.post("/api/auth/dev", json={})
    assert resp.status_code == 200
    return client


@pytest.fixture
async def hero_client(auth_client):
    """Logged-in client whose user already saved a character."""
    resp = await auth_client.post("/api/character", json=CHARACTER_PAYLOAD)
    assert resp.status_code == 200
    return auth_client


@pytest.fixture
def catalog() -> AssetCatalog:
    return TEST_CATALOG


@pytest.fixture
def character_payload() -> dict:
    return dict(CHARACTER_PAYLOAD)
