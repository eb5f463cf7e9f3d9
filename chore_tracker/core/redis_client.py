"""Redis client for chore and team document storage."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from datetime import UTC, datetime
from functools import wraps
from typing import Any, TypeVar

from redis.asyncio import Redis
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import RedisError

from chore_tracker.core.config import Constants, settings


logger = logging.getLogger(__name__)

# Type variable for generic retry decorator
T = TypeVar("T")


def with_retry(
    max_retries: int = Constants.REDIS_WRITE_MAX_RETRIES,
    base_delay: float = Constants.REDIS_RETRY_BASE_DELAY_SECONDS,
) -> Callable[[Callable[..., Coroutine[Any, Any, T]]], Callable[..., Coroutine[Any, Any, T]]]:
    """Retry an async Redis call with exponential backoff.

    Only RedisError is retried; anything else propagates on the first attempt.

    Args:
        max_retries: Maximum number of attempts
        base_delay: Base delay in seconds for exponential backoff

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., Coroutine[Any, Any, T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:  # noqa: ANN401
            last_exception = None
            for attempt in range(max_retries):
                try:
                    return await func(*args, **kwargs)
                except RedisError as e:
                    last_exception = e
                    if attempt < max_retries - 1:
                        delay = base_delay * (2**attempt)
                        logger.warning(
                            "Storage write attempt %d/%d failed: %s. Retrying in %.2fs",
                            attempt + 1,
                            max_retries,
                            e,
                            delay,
                        )
                        await asyncio.sleep(delay)
                    else:
                        logger.error(
                            "Storage write gave up after %d attempts: %s",
                            max_retries,
                            e,
                        )
            raise last_exception  # type: ignore[misc]

        return wrapper

    return decorator


class RedisClient:
    """Async Redis client wrapper with connection pooling."""

    def __init__(self, url: str | None = None) -> None:
        """Initialize Redis client.

        Args:
            url: Redis URL, defaults to the configured REDIS_URL
        """
        self._url = url or settings.redis_url
        self._client: Redis | None = None
        self._pool: ConnectionPool | None = None
        self._enabled = bool(self._url)

        # Health tracking
        self._last_successful_operation: datetime | None = None
        self._failure_count = 0
        self._total_operations = 0

        if self._enabled and self._url:
            try:
                self._pool = ConnectionPool.from_url(
                    self._url,
                    decode_responses=True,
                    max_connections=Constants.REDIS_MAX_CONNECTIONS,
                )
                self._client = Redis(connection_pool=self._pool)
                logger.info("Redis client initialized with URL: %s", self._url)
            except (RedisError, ValueError) as e:
                logger.warning("Failed to initialize Redis client: %s", e)
                self._enabled = False
                self._client = None
                self._pool = None
        else:
            logger.info("Redis URL not configured")

    @property
    def is_available(self) -> bool:
        """Check if Redis is available."""
        return self._enabled and self._client is not None

    def get_health_status(self) -> dict[str, Any]:
        """Get Redis health status.

        Returns:
            Dict with health status including last successful operation,
            failure count, and total operations
        """
        return {
            "backend": "redis",
            "enabled": self._enabled,
            "connected": self.is_available,
            "last_successful_operation": self._last_successful_operation.isoformat()
            if self._last_successful_operation
            else None,
            "failure_count": self._failure_count,
            "total_operations": self._total_operations,
        }

    def _record_success(self) -> None:
        """Record successful Redis operation."""
        self._last_successful_operation = datetime.now(UTC)
        self._total_operations += 1

    def _record_failure(self) -> None:
        """Record failed Redis operation."""
        self._failure_count += 1
        self._total_operations += 1

    async def get(self, key: str) -> str | None:
        """Get value from Redis.

        Args:
            key: Storage key

        Returns:
            Stored value, or None if the key is missing

        Raises:
            RedisError: If Redis is unavailable or the read failed
        """
        if not self.is_available or not self._client:
            raise RedisError("Redis is not configured")

        try:
            value = await self._client.get(key)
        except RedisError as e:
            self._record_failure()
            logger.warning("Storage read failed for key %s: %s", key, e)
            raise
        self._record_success()
        return value

    async def set(self, key: str, value: str) -> None:
        """Store a value, retrying with backoff on failure.

        Args:
            key: Storage key
            value: Value to store

        Raises:
            RedisError: If Redis is unavailable or every attempt failed
        """
        if not self.is_available or not self._client:
            raise RedisError("Redis is not configured")

        @with_retry()
        async def _set_operation() -> None:
            if self._client:
                await self._client.set(key, value)

        try:
            await _set_operation()
        except RedisError:
            self._record_failure()
            raise
        self._record_success()
        logger.debug("Stored key: %s", key)

    async def ping(self) -> bool:
        """Ping Redis to check connection.

        Returns:
            True if Redis is responsive, False otherwise
        """
        if not self.is_available or not self._client:
            return False

        try:
            result = await self._client.ping()  # type: ignore[misc]
            return bool(result)
        except RedisError as e:
            logger.warning("Redis PING failed: %s", e)
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            logger.info("Redis client closed")
