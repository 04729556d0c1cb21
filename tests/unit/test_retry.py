"""Tests for the retry executor and backoff strategy."""
import pytest
from unittest.mock import AsyncMock, patch

from sunvoypy.core.api.config import RetryConfig
from sunvoypy.core.api.retry import LinearBackoffStrategy, RetryExecutor


class RecordingStrategy(LinearBackoffStrategy):
    """Linear strategy that records waits instead of sleeping."""

    def __init__(self, base_delay=1.0):
        super().__init__(base_delay)
        self.waits = []

    async def wait_async(self, attempt):
        self.waits.append(self.delay(attempt))


def flaky(failures, result='ok', error=ConnectionError):
    """Coroutine function failing `failures` times before returning result."""
    state = {'calls': 0}

    async def operation():
        state['calls'] += 1
        if state['calls'] <= failures:
            raise error(f"failure {state['calls']}")
        return result

    return operation, state


class TestLinearBackoffStrategy:
    """Test suite for LinearBackoffStrategy."""

    def test_delay_grows_linearly(self):
        strategy = LinearBackoffStrategy(base_delay=1.5)

        assert [strategy.delay(i) for i in (1, 2, 3)] == [1.5, 3.0, 4.5]

    def test_should_retry_until_limit(self):
        strategy = LinearBackoffStrategy()

        assert strategy.should_retry(1, 3) is True
        assert strategy.should_retry(2, 3) is True
        assert strategy.should_retry(3, 3) is False

    def test_negative_base_delay_rejected(self):
        with pytest.raises(ValueError):
            LinearBackoffStrategy(base_delay=-1)

    @pytest.mark.asyncio
    async def test_wait_async_sleeps_for_delay(self):
        strategy = LinearBackoffStrategy(base_delay=2.0)

        with patch('sunvoypy.core.api.retry.retry_strategy.asyncio.sleep', new_callable=AsyncMock) as sleep:
            await strategy.wait_async(3)

        sleep.assert_awaited_once_with(6.0)


class TestRetryExecutor:
    """Test suite for RetryExecutor."""

    @pytest.mark.asyncio
    async def test_first_attempt_success(self):
        strategy = RecordingStrategy()
        executor = RetryExecutor(strategy, max_attempts=3)
        operation, state = flaky(0)

        assert await executor.execute(operation) == 'ok'
        assert state['calls'] == 1
        assert strategy.waits == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failures", [1, 2])
    async def test_recovers_after_failures(self, failures):
        strategy = RecordingStrategy(base_delay=1.0)
        executor = RetryExecutor(strategy, max_attempts=3)
        operation, state = flaky(failures, result=[1, 2, 3])

        assert await executor.execute(operation) == [1, 2, 3]
        assert state['calls'] == failures + 1
        # wait before attempt i+1 is proportional to i
        assert strategy.waits == [1.0 * i for i in range(1, failures + 1)]

    @pytest.mark.asyncio
    async def test_exhaustion_raises_last_error_unchanged(self):
        strategy = RecordingStrategy()
        executor = RetryExecutor(strategy, max_attempts=3)
        errors = [ValueError("first"), KeyError("second"), RuntimeError("third")]

        async def operation():
            raise errors.pop(0)

        with pytest.raises(RuntimeError) as exc_info:
            await executor.execute(operation)

        assert str(exc_info.value) == "third"
        assert exc_info.value.__cause__ is None
        assert strategy.waits == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_max_attempts_override(self):
        executor = RetryExecutor(RecordingStrategy(), max_attempts=3)
        operation, state = flaky(10)

        with pytest.raises(ConnectionError):
            await executor.execute(operation, max_attempts=5)

        assert state['calls'] == 5

    @pytest.mark.asyncio
    async def test_single_attempt_does_not_wait(self):
        strategy = RecordingStrategy()
        executor = RetryExecutor(strategy, max_attempts=1)
        operation, state = flaky(1)

        with pytest.raises(ConnectionError):
            await executor.execute(operation)

        assert state['calls'] == 1
        assert strategy.waits == []

    @pytest.mark.asyncio
    async def test_invalid_max_attempts(self):
        executor = RetryExecutor(RecordingStrategy())
        operation, _ = flaky(0)

        with pytest.raises(ValueError):
            await executor.execute(operation, max_attempts=0)

    @pytest.mark.asyncio
    async def test_failed_attempts_are_logged(self, caplog):
        executor = RetryExecutor(RecordingStrategy(), max_attempts=2)
        operation, _ = flaky(1)

        with caplog.at_level('WARNING', logger='sunvoypy.retry'):
            await executor.execute(operation, description="users")

        assert "users: Attempt 1 failed: failure 1" in caplog.text

    def test_from_config(self):
        executor = RetryExecutor.from_config(RetryConfig(max_attempts=4, base_delay=0.25))

        assert executor.max_attempts == 4
        assert executor.strategy.delay(2) == 0.5
