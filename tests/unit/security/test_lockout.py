"""Tests for failed-login tracking and lockout."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
import redis

from swiftbank.core.config import Settings
from swiftbank.core.security.lockout import LoginAttemptTracker


@pytest.fixture
def tracker(redis_client):
    return LoginAttemptTracker(redis_client, max_attempts=3, lockout_duration=timedelta(minutes=15))


class TestLoginAttemptTracker:

    def test_attempts_remaining(self, tracker):
        result = tracker.record_failure("alice")
        assert not result.is_locked
        assert result.attempts_remaining == 2
        assert "2 attempts remaining" in result.error

    def test_locks_at_limit(self, tracker):
        tracker.record_failure("alice")
        tracker.record_failure("alice")
        result = tracker.record_failure("alice")
        assert result.is_locked
        assert result.attempts_remaining == 0
        assert "15 minutes" in result.error
        assert tracker.is_locked("alice")

    def test_identifiers_are_independent(self, tracker):
        for _ in range(3):
            tracker.record_failure("alice")
        assert not tracker.is_locked("bob")
        assert tracker.can_attempt("bob").allowed

    def test_failures_while_locked_do_not_extend(self, tracker, clock):
        for _ in range(3):
            tracker.record_failure("alice")
        clock.advance(minutes=10)
        result = tracker.record_failure("alice")
        assert result.is_locked
        clock.advance(minutes=5)
        assert not tracker.is_locked("alice")

    def test_can_attempt_reports_remaining_minutes(self, tracker, clock):
        for _ in range(3):
            tracker.record_failure("alice")
        clock.advance(minutes=4, seconds=30)
        permission = tracker.can_attempt("alice")
        assert not permission.allowed
        assert permission.remaining_minutes == 11
        assert "11 minutes" in permission.error

    def test_lock_expires(self, tracker, clock):
        for _ in range(3):
            tracker.record_failure("alice")
        clock.advance(minutes=15)
        assert tracker.can_attempt("alice").allowed
        assert tracker.attempts("alice") == 0

    def test_success_resets(self, tracker):
        tracker.record_failure("alice")
        tracker.record_failure("alice")
        tracker.record_success("alice")
        assert tracker.attempts("alice") == 0
        assert not tracker.record_failure("alice").is_locked

    def test_admin_clear(self, tracker):
        for _ in range(3):
            tracker.record_failure("alice")
        tracker.clear("alice")
        assert not tracker.is_locked("alice")

    def test_invalid_limit(self, redis_client):
        with pytest.raises(ValueError):
            LoginAttemptTracker(redis_client, max_attempts=0)


class TestLockoutStorage:
    """Counters and locks are Redis keys with a bounded lifetime."""

    def test_keys_do_not_contain_identifier(self, tracker, redis_client):
        tracker.record_failure("alice@example.com")
        assert all("alice" not in key for key in redis_client._data)

    def test_counter_carries_lockout_expiry(self, tracker, redis_client):
        tracker.record_failure("alice")
        key = tracker._get_key("alice", "attempts")
        assert 0 < redis_client.ttl(key) <= 15 * 60

    def test_stale_counters_expire(self, tracker, redis_client, clock):
        """Identifiers that never log in successfully are forgotten."""
        for i in range(1000):
            tracker.record_failure(f"user{i}")
        assert redis_client.dbsize() == 1000

        clock.advance(minutes=15)
        assert redis_client.dbsize() == 0
        assert tracker.attempts("user1") == 0

    def test_counter_window_restarts_after_expiry(self, tracker, clock):
        tracker.record_failure("alice")
        tracker.record_failure("alice")
        clock.advance(minutes=16)
        result = tracker.record_failure("alice")
        assert not result.is_locked
        assert result.attempts_remaining == 2

    def test_lock_replaces_counter(self, tracker, redis_client):
        for _ in range(3):
            tracker.record_failure("alice")
        assert redis_client.exists(tracker._get_key("alice", "attempts")) == 0
        assert redis_client.exists(tracker._get_key("alice", "locked")) == 1

    def test_unreadable_state_denies_login(self):
        client = MagicMock()
        client.ttl.side_effect = redis.ConnectionError("connection refused")
        tracker = LoginAttemptTracker(client)
        permission = tracker.can_attempt("alice")
        assert not permission.allowed
        assert "unavailable" in permission.error


class TestFromSettings:

    def test_limits_from_settings(self, redis_client):
        settings = Settings(_env_file=None, max_login_attempts=5, lockout_duration_minutes=30)
        tracker = LoginAttemptTracker.from_settings(settings, client=redis_client)
        assert tracker.max_attempts == 5
        assert tracker.lockout_duration == timedelta(minutes=30)
        assert tracker.client is redis_client

    @patch("swiftbank.core.security.lockout.redis.from_url")
    def test_client_from_redis_url(self, mock_from_url):
        mock_from_url.return_value = MagicMock()
        settings = Settings(_env_file=None, redis_url="redis://cache:6379/2")
        tracker = LoginAttemptTracker.from_settings(settings)
        assert mock_from_url.call_args.args[0] == "redis://cache:6379/2"
        assert tracker.client is mock_from_url.return_value
