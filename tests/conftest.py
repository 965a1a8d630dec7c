import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import date
from typing import Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sowplan.core.security import hash_password
from sowplan.db.base import Base
from sowplan.db.session import get_db
from sowplan.main import app
from sowplan.models import CropPlan, Season, User

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    # StaticPool keeps the single in-memory connection alive for the whole test
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession):
    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


# ── Record factories ──────────────────────────────────────────────────────────


@pytest.fixture
def make_user(db: AsyncSession):
    async def _make(email: str = "grower@example.com", last_frost_date: Optional[date] = None) -> User:
        user = User(
            first_name="Test",
            email=email,
            hashed_password=hash_password("testpass"),
            last_frost_date=last_frost_date,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_season(db: AsyncSession):
    async def _make(
        user: User,
        year: Optional[int] = 2025,
        last_frost_date: Optional[date] = date(2025, 5, 10),
    ) -> Season:
        season = Season(user_id=user.id, name=f"{year} Garden", year=year, last_frost_date=last_frost_date)
        db.add(season)
        await db.commit()
        await db.refresh(season)
        return season

    return _make


@pytest.fixture
def make_crop_plan(db: AsyncSession):
    async def _make(user: User, season: Season, **fields) -> CropPlan:
        fields.setdefault("label", "Tomato")
        fields.setdefault("planting_method", "transplant")
        fields.setdefault("quantity_planned", 4)
        plan = CropPlan(user_id=user.id, garden_season_id=season.id, **fields)
        db.add(plan)
        await db.commit()
        await db.refresh(plan)
        return plan

    return _make


@pytest_asyncio.fixture
async def user(make_user) -> User:
    return await make_user()


@pytest_asyncio.fixture
async def season(make_season, user: User) -> Season:
    return await make_season(user)
