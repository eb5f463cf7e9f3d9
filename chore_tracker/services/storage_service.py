"""Persistence of chore and team member lists as whole JSON documents.

Plain reads are forgiving: a missing key, an unreachable backend, malformed
JSON, or records that fail validation all load as an empty list. Changes go
through `ChoreStore.transaction()`, which refuses to start when the backend
cannot be read, so a failed read is never written back as an empty list.
Writes replace the whole document.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError

from chore_tracker.core.config import settings
from chore_tracker.core.logging import log_with_context, span
from chore_tracker.core.memory_store import InMemoryStore
from chore_tracker.core.redis_client import RedisClient
from chore_tracker.domain.chore import Chore
from chore_tracker.domain.team import TeamMember
from chore_tracker.services.chore_service import Chores
from chore_tracker.services.team_service import Members


logger = logging.getLogger(__name__)

_chores_adapter = TypeAdapter(list[Chore])
_members_adapter = TypeAdapter(list[TeamMember])


class StorageBackend(Protocol):
    """Async key/value interface shared by the Redis and in-memory backends."""

    @property
    def is_available(self) -> bool: ...

    def get_health_status(self) -> dict[str, Any]: ...

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...


def get_backend() -> StorageBackend:
    """Use Redis when REDIS_URL is configured, otherwise keep data in memory."""
    if settings.redis_url:
        client = RedisClient(settings.redis_url)
        if client.is_available:
            return client
        logger.warning("Redis unavailable, falling back to in-memory storage")
    return InMemoryStore()


@dataclass
class Documents:
    """Both stored collections, as seen inside a transaction.

    Replace `chores` or `members` to have the new value written on commit.
    """

    chores: Chores
    members: Members


class ChoreStore:
    """Loads and saves the chore and team member documents."""

    def __init__(
        self,
        backend: StorageBackend,
        chores_key: str | None = None,
        team_members_key: str | None = None,
    ) -> None:
        self.backend = backend
        self.chores_key = chores_key or settings.chores_key
        self.team_members_key = team_members_key or settings.team_members_key
        self._write_lock = asyncio.Lock()

    async def _read(self, key: str, adapter: TypeAdapter) -> tuple:
        """Read and validate one document. Backend errors propagate."""
        raw = await self.backend.get(key)
        if raw is None:
            return ()
        try:
            return tuple(adapter.validate_json(raw))
        except ValidationError as e:
            log_with_context(
                logger,
                "warning",
                "storage_document_malformed",
                key=key,
                error_count=e.error_count(),
            )
            return ()

    async def _load(self, key: str, adapter: TypeAdapter) -> tuple:
        try:
            return await self._read(key, adapter)
        except RedisError as e:
            log_with_context(logger, "warning", "storage_read_failed", key=key, error=str(e))
            return ()

    async def load_chores(self) -> Chores:
        """Load all chores, or an empty tuple when nothing usable is stored."""
        with span("storage_service.load_chores"):
            return await self._load(self.chores_key, _chores_adapter)

    async def load_team_members(self) -> Members:
        """Load all team members, or an empty tuple when nothing usable is stored."""
        with span("storage_service.load_team_members"):
            return await self._load(self.team_members_key, _members_adapter)

    async def save_chores(self, chores: Chores) -> None:
        """Replace the stored chore document."""
        with span("storage_service.save_chores"):
            await self.backend.set(self.chores_key, _chores_adapter.dump_json(list(chores)).decode())
        log_with_context(logger, "debug", "chores_saved", key=self.chores_key, count=len(chores))

    async def save_team_members(self, members: Members) -> None:
        """Replace the stored team member document."""
        with span("storage_service.save_team_members"):
            await self.backend.set(self.team_members_key, _members_adapter.dump_json(list(members)).decode())
        log_with_context(logger, "debug", "team_members_saved", key=self.team_members_key, count=len(members))

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Documents]:
        """Read both documents, let the caller change them, then save what changed.

        Transactions on the same store run one at a time, so concurrent
        changes never overwrite each other. Chores are saved before team
        members, so a failed member write never leaves chores pointing at
        a removed member. Nothing is saved if the body raises.

        Raises:
            RedisError: If the backend cannot be read or written
        """
        async with self._write_lock:
            with span("storage_service.transaction"):
                chores = await self._read(self.chores_key, _chores_adapter)
                members = await self._read(self.team_members_key, _members_adapter)
                documents = Documents(chores=chores, members=members)

                yield documents

                if documents.chores is not chores:
                    await self.save_chores(documents.chores)
                if documents.members is not members:
                    await self.save_team_members(documents.members)
