"""
Tests for retry logic.
"""

import pytest
from sqlalchemy.exc import OperationalError

from ojtech.retry import exponential_backoff, is_transient_error, RetryError


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    delays = []
    monkeypatch.setattr("ojtech.retry.time.sleep", delays.append)
    return delays


class TestExponentialBackoff:
    """Test exponential backoff decorator."""

    def test_success_on_first_try(self):
        """Function that succeeds immediately should not retry."""
        call_count = [0]

        @exponential_backoff(max_retries=3, base_delay=0.1)
        def succeeds():
            call_count[0] += 1
            return "success"

        assert succeeds() == "success"
        assert call_count[0] == 1

    def test_retry_then_succeed(self):
        """Function that fails then succeeds should retry."""
        call_count = [0]

        @exponential_backoff(max_retries=3, base_delay=0.01)
        def fails_twice():
            call_count[0] += 1
            if call_count[0] < 3:
                raise ConnectionError("Temporary failure")
            return "success"

        assert fails_twice() == "success"
        assert call_count[0] == 3

    def test_all_retries_exhausted(self):
        """Should raise RetryError after all attempts fail."""
        call_count = [0]

        @exponential_backoff(max_retries=2, base_delay=0.01)
        def always_fails():
            call_count[0] += 1
            raise ValueError("Always fails")

        with pytest.raises(RetryError) as exc_info:
            always_fails()

        assert call_count[0] == 3  # Initial + 2 retries
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_delays_grow_and_cap(self, no_sleep):
        @exponential_backoff(max_retries=4, base_delay=1.0, max_delay=3.0)
        def always_fails():
            raise ConnectionError("down")

        with pytest.raises(RetryError):
            always_fails()
        assert no_sleep == [1.0, 2.0, 3.0, 3.0]

    def test_unlisted_exception_not_retried(self):
        call_count = [0]

        @exponential_backoff(max_retries=3, exceptions=(ConnectionError,))
        def wrong_type():
            call_count[0] += 1
            raise KeyError("nope")

        with pytest.raises(KeyError):
            wrong_type()
        assert call_count[0] == 1

    def test_retry_if_rejects(self):
        call_count = [0]

        @exponential_backoff(max_retries=3, retry_if=lambda e: "locked" in str(e))
        def permanent():
            call_count[0] += 1
            raise RuntimeError("syntax error")

        with pytest.raises(RuntimeError):
            permanent()
        assert call_count[0] == 1

    def test_on_retry_callback(self):
        seen = []

        @exponential_backoff(max_retries=2, base_delay=0.5, on_retry=lambda a, e, d: seen.append((a, d)))
        def always_fails():
            raise ConnectionError("down")

        with pytest.raises(RetryError):
            always_fails()
        assert seen == [(1, 0.5), (2, 1.0)]


class TestTransientErrors:
    """Test transient error classification."""

    @pytest.mark.parametrize("message", [
        "database is locked",
        "Connection refused",
        "Operation timed out",
        "disk I/O error",
    ])
    def test_transient(self, message):
        assert is_transient_error(Exception(message))

    def test_operational_error_locked(self):
        err = OperationalError("SELECT 1", {}, Exception("database is locked"))
        assert is_transient_error(err)

    @pytest.mark.parametrize("message", ["no such table: jobs", "UNIQUE constraint failed"])
    def test_permanent(self, message):
        assert not is_transient_error(Exception(message))
