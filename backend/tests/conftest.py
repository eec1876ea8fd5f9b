"""Shared fixtures: an API client with stubbed sessions and signed tokens."""

from collections.abc import AsyncGenerator, Callable, Iterator, Mapping
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import jwt
import pytest
from fastapi.testclient import TestClient

from desk.config import settings
from desk.main import app
from desk.models.base import get_async_session
from lifecycle.errors import NotFoundError
from lifecycle.state import RequestState

T0 = datetime(2025, 11, 27, 9, 0, tzinfo=timezone.utc)


def issue_token(user_id: int, role: str, *, secret: str | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=7)).timestamp()),
    }
    return jwt.encode(
        payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm
    )


def _auth_headers(user_id: int, role: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(user_id, role)}"}


class FixedClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class InMemoryRequestStore:
    """RequestStore over a dict, recording every save."""

    def __init__(self, *states: RequestState) -> None:
        self.states = {state.request_id: state for state in states}
        self.saves: list[tuple[int, dict[str, object]]] = []

    async def load(self, request_id: int) -> RequestState:
        try:
            return self.states[request_id]
        except KeyError:
            raise NotFoundError(request_id) from None

    async def save(
        self, request_id: int, changes: Mapping[str, object]
    ) -> RequestState:
        state = await self.load(request_id)
        self.saves.append((request_id, dict(changes)))
        self.states[request_id] = state.apply(changes)
        return self.states[request_id]


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def new_request() -> RequestState:
    """A request just submitted by tenant 7 at T0."""
    return RequestState(request_id=1, tenant_id=7, created_at=T0, in_queue_at=T0)


@pytest.fixture
def store(new_request: RequestState) -> InMemoryRequestStore:
    return InMemoryRequestStore(new_request)


@pytest.fixture
def db_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(db_session: AsyncMock) -> Iterator[TestClient]:
    async def _session() -> AsyncGenerator[AsyncMock, None]:
        yield db_session

    app.dependency_overrides[get_async_session] = _session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[int, str], dict[str, str]]:
    """Factory for an Authorization header carrying ``(user_id, role)``."""
    return _auth_headers


@pytest.fixture
def make_store() -> Callable[..., InMemoryRequestStore]:
    return InMemoryRequestStore
