"""Pytest fixtures: fresh store per test with a controllable clock, app client."""
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from app.database import get_store
from app.main import app
from app.services.event_store import EventStore


class FakeClock:
    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock) -> EventStore:
    return EventStore(clock=clock)


@pytest.fixture
async def async_client(store):
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def gallery(store):
    return await store.create_gallery(
        {"name": "Anna & Max", "owner_email": "anna@example.com", "theme": "wedding"},
        gallery_id="g1",
    )
