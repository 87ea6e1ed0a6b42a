"""Build the configured storage engine."""

import logging

from signed_url_store.clock import Clock, SystemClock
from signed_url_store.config import SignedUrlConfig
from signed_url_store.database import Database
from signed_url_store.enums import StorageBackend
from signed_url_store.storage.base import SignedUrlStorage
from signed_url_store.storage.memory_storage import InMemorySignedUrlStorage

logger = logging.getLogger(__name__)


def create_storage(
    config: SignedUrlConfig,
    clock: Clock | None = None,
    database: Database | None = None,
) -> SignedUrlStorage:
    """Create the storage engine selected by ``config.storage_backend``.

    Args:
        config: Application configuration.
        clock: Clock to inject; defaults to the system clock.
        database: Database for the SQL backend; created from
            ``config.database_url`` when omitted. Ignored by the memory backend.

    Returns:
        A ready-to-use storage engine. Tables are not created here.
    """
    clock = clock or SystemClock()

    if config.storage_backend == StorageBackend.MEMORY:
        logger.info(
            "Using in-memory signed url storage (%d lock shards)",
            config.lock_shards,
        )
        return InMemorySignedUrlStorage(clock, lock_shards=config.lock_shards)

    # Imported here so the memory backend works without a database driver
    from signed_url_store.dao.signed_url_dao import SignedUrlDAO

    if database is None:
        database = Database(config.database_url)
    logger.info("Using database signed url storage")
    return SignedUrlDAO(database, clock)
