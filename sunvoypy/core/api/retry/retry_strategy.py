"""Retry strategies using Strategy Pattern."""
import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional, TypeVar

from ...logging import get_logger

T = TypeVar('T')


class RetryStrategy(ABC):
    """Abstract retry strategy."""

    @abstractmethod
    def should_retry(self, attempt: int, max_attempts: int) -> bool:
        """Determines if another attempt follows the given failed one."""
        pass

    @abstractmethod
    def delay(self, attempt: int) -> float:
        """Seconds to wait after the given (1-indexed) failed attempt."""
        pass

    async def wait_async(self, attempt: int):
        """Waits before retry (async)."""
        await asyncio.sleep(self.delay(attempt))


class LinearBackoffStrategy(RetryStrategy):
    """Linear backoff: waits base_delay, 2 * base_delay, ..."""

    def __init__(self, base_delay: float = 1.0):
        if base_delay < 0:
            raise ValueError("base_delay must not be negative")
        self.base_delay = base_delay

    def should_retry(self, attempt: int, max_attempts: int) -> bool:
        """Every failure is retryable until attempts run out."""
        return attempt < max_attempts

    def delay(self, attempt: int) -> float:
        return self.base_delay * attempt


class RetryExecutor:
    """
    Runs an async operation with bounded retries.

    No jitter and no per-error policy: any exception counts as a failed
    attempt. When attempts are exhausted the last error is re-raised as is.

    Example:
        >>> executor = RetryExecutor(LinearBackoffStrategy(1.0), max_attempts=3)
        >>> response = await executor.execute(lambda: client.post('/api/users'))
    """

    def __init__(
        self,
        strategy: Optional[RetryStrategy] = None,
        max_attempts: int = 3
    ):
        """
        Initialize executor.

        Args:
            strategy: Backoff strategy (linear, 1s base by default)
            max_attempts: Default attempt limit for execute()
        """
        self._strategy = strategy or LinearBackoffStrategy()
        self._max_attempts = max_attempts
        self._logger = get_logger('sunvoypy.retry')

    @classmethod
    def from_config(cls, config) -> 'RetryExecutor':
        """Create executor from a RetryConfig."""
        return cls(LinearBackoffStrategy(config.base_delay), config.max_attempts)

    @property
    def strategy(self) -> RetryStrategy:
        return self._strategy

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        max_attempts: Optional[int] = None,
        description: Optional[str] = None
    ) -> T:
        """
        Execute operation, retrying on failure.

        Args:
            operation: Zero-argument coroutine function
            max_attempts: Overrides the executor default
            description: Label used in log lines

        Returns:
            Whatever the first successful attempt returns

        Raises:
            Exception: The error of the final attempt, unchanged
        """
        attempts = self._max_attempts if max_attempts is None else max_attempts
        if attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        prefix = f"{description}: " if description else ""
        attempt = 0

        while True:
            attempt += 1
            try:
                return await operation()
            except Exception as e:
                self._logger.warning(f"{prefix}Attempt {attempt} failed: {e}")
                if not self._strategy.should_retry(attempt, attempts):
                    raise
                await self._strategy.wait_async(attempt)
