"""In-memory key/value store used when Redis is not configured."""

import logging
import threading
import time
from typing import Any


logger = logging.getLogger(__name__)


class InMemoryStore:
    """Thread-safe in-memory key/value store."""

    def __init__(self) -> None:
        """Initialize in-memory store."""
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

        # Health tracking
        self._last_successful_operation: float | None = None
        self._total_operations = 0

    @property
    def is_available(self) -> bool:
        """Check if store is available (always true for in-memory)."""
        return True

    def get_health_status(self) -> dict[str, Any]:
        """Get store health status."""
        return {
            "backend": "memory",
            "enabled": True,
            "connected": True,
            "last_successful_operation": self._last_successful_operation,
            "total_operations": self._total_operations,
            "entries": len(self._data),
        }

    def _record_success(self) -> None:
        self._last_successful_operation = time.time()
        self._total_operations += 1

    async def get(self, key: str) -> str | None:
        """Get a stored value, or None if the key is missing."""
        with self._lock:
            value = self._data.get(key)
            self._record_success()
            return value

    async def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""
        with self._lock:
            self._data[key] = value
            self._record_success()
            logger.debug("Stored key: %s", key)

    async def ping(self) -> bool:
        """Always True for the in-memory store."""
        return True

    async def close(self) -> None:
        """Close store (no-op for in-memory store)."""
        logger.info("In-memory store closed")
