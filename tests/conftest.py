"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from swiftbank.core.access import Principal, WILDCARD
from swiftbank.core.config import Settings


@pytest.fixture
def make_principal():
    """Factory for principal snapshots with sensible defaults."""

    def _make(
        id: str = "u1",
        role: str = "customer",
        capabilities=("account_view",),
        is_active: bool = True,
        owner_links=(),
    ) -> Principal:
        return Principal(
            id=id,
            role=role,
            capabilities=frozenset(capabilities),
            is_active=is_active,
            owner_links=tuple(owner_links),
        )

    return _make


@pytest.fixture
def customer(make_principal):
    return make_principal(
        id="cust-1",
        role="customer",
        capabilities=["account_view", "transaction_create", "profile_edit", "profile_view"],
    )


@pytest.fixture
def admin(make_principal):
    return make_principal(id="admin-1", role="admin", capabilities=[WILDCARD])


@pytest.fixture
def support(make_principal):
    return make_principal(id="support-1", role="support", capabilities=["user_view", "transaction_view"])


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment."""
    return Settings(
        _env_file=None,
        secret_key="test-secret",
        log_dir=str(tmp_path / "logs"),
        log_to_file=False,
    )


class FakeClock:
    """Manually advanced clock for time-based policies."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


class InMemoryRedis:
    """
    Stand-in for the parts of a ``redis.Redis`` client the lockout tracker
    uses. Expiry follows the supplied clock so tests can move time forward.
    """

    def __init__(self, clock):
        self._clock = clock
        self._data = {}
        self._expires = {}

    def _purge(self):
        now = self._clock()
        for key in [k for k, at in self._expires.items() if at <= now]:
            self._data.pop(key, None)
            self._expires.pop(key, None)

    def get(self, key):
        self._purge()
        return self._data.get(key)

    def set(self, key, value, ex=None):
        self._purge()
        self._data[key] = str(value)
        self._expires.pop(key, None)
        if ex is not None:
            self._expires[key] = self._clock() + timedelta(seconds=ex)
        return True

    def incr(self, key):
        self._purge()
        value = int(self._data.get(key, 0)) + 1
        self._data[key] = str(value)
        return value

    def expire(self, key, seconds):
        self._purge()
        if key not in self._data:
            return False
        self._expires[key] = self._clock() + timedelta(seconds=seconds)
        return True

    def ttl(self, key):
        self._purge()
        if key not in self._data:
            return -2
        if key not in self._expires:
            return -1
        return int((self._expires[key] - self._clock()).total_seconds())

    def exists(self, *keys):
        self._purge()
        return sum(1 for key in keys if key in self._data)

    def delete(self, *keys):
        self._purge()
        removed = 0
        for key in keys:
            if self._data.pop(key, None) is not None:
                removed += 1
            self._expires.pop(key, None)
        return removed

    def dbsize(self):
        self._purge()
        return len(self._data)

    def pipeline(self, transaction=True):
        return _InMemoryPipeline(self)


class _InMemoryPipeline:

    def __init__(self, client):
        self._client = client
        self._calls = []

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self._calls = []

    def __getattr__(self, name):
        method = getattr(self._client, name)

        def _queue(*args, **kwargs):
            self._calls.append((method, args, kwargs))
            return self
        return _queue

    def execute(self):
        results = [method(*args, **kwargs) for method, args, kwargs in self._calls]
        self._calls = []
        return results


@pytest.fixture
def redis_client(clock):
    return InMemoryRedis(clock)
