import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import httpx
from httpx import ASGITransport
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.models import *
from app.db.session import enable_sqlite_foreign_keys
from tests.test_config import test_settings

CATEGORIES = [
    ("Breakfast", "breakfast"),
    ("Dessert", "dessert"),
    ("Dinner", "dinner"),
    ("Vegetarian", "vegetarian"),
]

ALICE_ID = "user-alice"
BOB_ID = "user-bob"


def auth_headers(user_id: str) -> dict[str, str]:
    return {test_settings.USER_ID_HEADER: user_id}


def recipe_data(title: str, **overrides) -> dict:
    data = {
        "title": title,
        "prep_time": 5,
        "cook_time": 20,
        "servings": 2,
        "difficulty": "easy",
        "ingredients": [{"name": "something"}],
        "instructions": [{"description": "Cook it."}],
        "category_ids": [],
    }
    data.update(overrides)
    return data


@pytest.fixture
async def db_engine():
    # one in-memory database per test, shared by every connection
    engine = create_async_engine(
        test_settings.ASYNC_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine.sync_engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    async with async_sessionmaker(bind=db_engine, expire_on_commit=False)() as session:
        yield session


@pytest.fixture
async def categories(db_session: AsyncSession) -> dict[str, int]:
    rows = [Category(name=name, slug=slug) for name, slug in CATEGORIES]
    db_session.add_all(rows)
    await db_session.commit()
    return {c.slug: c.id for c in rows}


@pytest.fixture
async def profiles(db_session: AsyncSession) -> dict[str, str]:
    db_session.add_all(
        [
            Profile(id=ALICE_ID, username="alice"),
            Profile(id=BOB_ID, username="bob"),
        ]
    )
    await db_session.commit()
    return {"alice": ALICE_ID, "bob": BOB_ID}


@pytest.fixture
def uploaded_objects(monkeypatch) -> list[str]:
    uploads: list[str] = []

    async def fake_upload_file(file_obj, object_name: str, content_type: str) -> str:
        uploads.append(object_name)
        return f"{test_settings.S3_PUBLIC_ENDPOINT}/{test_settings.S3_BUCKET_NAME}/{object_name}"

    monkeypatch.setattr("app.services.image_service.s3_client.upload_file", fake_upload_file)
    return uploads


@pytest.fixture
def deleted_objects(monkeypatch, uploaded_objects) -> list[str]:
    deletions: list[str] = []

    async def fake_delete_file(object_name: str) -> None:
        deletions.append(object_name)

    monkeypatch.setattr("app.services.image_service.s3_client.delete_file", fake_delete_file)
    return deletions


@pytest.fixture
async def async_client(db_engine, uploaded_objects):
    from app.main import app
    from app.db.session import get_db

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with async_sessionmaker(bind=db_engine, expire_on_commit=False)() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
