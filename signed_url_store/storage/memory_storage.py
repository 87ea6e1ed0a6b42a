"""In-memory signed URL storage."""

import asyncio
import logging
import zlib

from signed_url_store.clock import Clock
from signed_url_store.exceptions import BadIdentifier
from signed_url_store.models.domain import SignedUrlRecord
from signed_url_store.storage.base import SignedUrlStorage

logger = logging.getLogger(__name__)


class InMemorySignedUrlStorage(SignedUrlStorage):
    """Signed URL storage backed by a dict.

    Identifiers are hashed onto a fixed number of lock shards. Two
    operations on the same identifier hold the same lock, operations on
    different identifiers usually hold different ones.

    None of the critical sections below await, so on one event loop they
    already run without interleaving and the locks are never contended.
    The locks stay so that subclasses which await inside a critical
    section (for example to write through to another store) keep
    check-and-decrement atomic per identifier.
    """

    DEFAULT_LOCK_SHARDS = 16

    def __init__(self, clock: Clock, lock_shards: int = DEFAULT_LOCK_SHARDS):
        """Initialize an empty storage.

        Args:
            clock: Source of the current instant.
            lock_shards: Number of striped locks guarding the records.
        """
        super().__init__(clock)
        if lock_shards < 1:
            raise ValueError("lock_shards must be at least 1")
        self._records: dict[str, SignedUrlRecord] = {}
        self._locks = [asyncio.Lock() for _ in range(lock_shards)]

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records

    def _lock_for(self, identifier: str) -> asyncio.Lock:
        key = identifier.encode("utf-8", "surrogatepass")
        return self._locks[zlib.crc32(key) % len(self._locks)]

    async def store(self, record: SignedUrlRecord) -> None:
        async with self._lock_for(record.identifier):
            self._records[record.identifier] = record
        logger.debug(
            "Stored signed url %s (max_usage=%d, expires_at=%s)",
            record.identifier,
            record.max_usage,
            record.expires_at.isoformat(),
        )

    async def consume(self, identifier: str) -> None:
        now = self._clock.now()
        async with self._lock_for(identifier):
            record = self._records.get(identifier)
            if (
                record is None
                or record.remaining_usage < 1
                or record.is_expired(now)
            ):
                logger.debug("Rejected signed url %s", identifier)
                raise BadIdentifier.for_identifier(identifier)

            updated = record.consumed()
            if updated.remaining_usage == 0:
                del self._records[identifier]
            else:
                self._records[identifier] = updated

        logger.debug(
            "Consumed signed url %s (%d uses left)",
            identifier,
            updated.remaining_usage,
        )

    async def gc(self) -> None:
        now = self._clock.now()
        candidates = [
            identifier
            for identifier, record in list(self._records.items())
            if record.is_expired(now) or record.remaining_usage < 1
        ]

        removed = 0
        for identifier in candidates:
            async with self._lock_for(identifier):
                # The record may have been replaced since the scan
                record = self._records.get(identifier)
                if record is not None and (
                    record.is_expired(now) or record.remaining_usage < 1
                ):
                    del self._records[identifier]
                    removed += 1

        if removed:
            logger.info(
                "Garbage collected %d expired or exhausted signed urls", removed
            )
