import asyncio
from datetime import datetime

import pytest

from blocstore.failures import ServerFailure
from blocstore.features.auth import AuthSession, InMemorySessionStorage, User
from blocstore.features.dashboard import DashboardData


class FakeAuthRepository:
    """可設定延遲與失敗的 AuthRepository。"""

    def __init__(self, delay=0.0, error=None, session=None):
        self.delay = delay
        self.error = error
        self.session = session
        self.calls = []

    def _result(self, email, name="Demo User"):
        if self.error is not None:
            raise self.error
        if self.session is not None:
            return self.session
        user = User(id="u-1", email=email, name=name, created_at=datetime(2024, 1, 1))
        return AuthSession(user=user, token="token-123")

    async def login(self, email, password):
        self.calls.append(("login", email))
        await asyncio.sleep(self.delay)
        return self._result(email)

    async def register(self, email, password, name):
        self.calls.append(("register", email, name))
        await asyncio.sleep(self.delay)
        return self._result(email, name)


class BrokenSessionStorage(InMemorySessionStorage):
    """每個寫入與讀取都拋出異常的 storage。"""

    async def save_token(self, token):
        raise OSError("disk full")

    async def save_user(self, user_json):
        raise OSError("disk full")

    async def get_persisted_user(self):
        raise OSError("keychain locked")

    async def clear(self):
        raise OSError("keychain locked")


class FakeDashboardRepository:
    def __init__(self, delay=0.0, error=None, payload=None):
        self.delay = delay
        self.error = error
        self.payload = payload
        self.calls = 0

    async def get_dashboard_data(self):
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.payload is not None:
            return self.payload
        return DashboardData(user_name="Demo", user_email="demo@example.com", total_items=3)


@pytest.fixture
def auth_repository():
    return FakeAuthRepository()


@pytest.fixture
def slow_auth_repository():
    return FakeAuthRepository(delay=0.05)


@pytest.fixture
def failing_auth_repository():
    return FakeAuthRepository(error=ServerFailure("Server error: 500"))


@pytest.fixture
def session_storage():
    return InMemorySessionStorage()


@pytest.fixture
def broken_storage():
    return BrokenSessionStorage()


@pytest.fixture
def dashboard_repository():
    return FakeDashboardRepository()


@pytest.fixture
def make_auth_repository():
    return FakeAuthRepository


@pytest.fixture
def make_dashboard_repository():
    return FakeDashboardRepository
