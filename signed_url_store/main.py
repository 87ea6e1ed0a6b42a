"""Garbage collection worker entrypoint.

Wires configuration, database, storage and the gc scheduler together and
runs until SIGINT or SIGTERM.
"""

import asyncio
import logging
import signal
import sys

from signed_url_store.clock import Clock, SystemClock
from signed_url_store.config import SignedUrlConfig
from signed_url_store.database import Database
from signed_url_store.enums import StorageBackend
from signed_url_store.scheduler.gc_scheduler import GarbageCollectionScheduler
from signed_url_store.storage.base import SignedUrlStorage
from signed_url_store.storage.factory import create_storage

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the worker process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


class Application:
    """Owns the long-lived components of the worker."""

    def __init__(self, config: SignedUrlConfig, clock: Clock | None = None):
        self.config = config
        self.clock = clock or SystemClock()
        self.database: Database | None = None
        self.storage: SignedUrlStorage | None = None
        self.scheduler: GarbageCollectionScheduler | None = None
        self._shutdown_event = asyncio.Event()

    async def setup(self) -> None:
        """Initialize database, storage and scheduler."""
        logger.info("Setting up signed url storage...")

        if self.config.storage_backend == StorageBackend.DATABASE:
            self.database = Database(self.config.database_url)
            if self.config.auto_create_tables:
                await self.database.init_db()
                logger.info("Database initialized (auto_create_tables=true)")
            else:
                logger.info(
                    "Database initialized (auto_create_tables=false; relying on Alembic migrations)"
                )

        self.storage = create_storage(self.config, self.clock, self.database)
        self.scheduler = GarbageCollectionScheduler(self.storage, self.config)

    async def run(self) -> None:
        """Run the scheduler until shutdown is requested."""
        if self.scheduler is None:
            raise RuntimeError("Application not set up")

        await self.scheduler.start()
        await self._shutdown_event.wait()

    def request_shutdown(self) -> None:
        self._shutdown_event.set()

    async def shutdown(self) -> None:
        """Stop the scheduler and release the database."""
        logger.info("Shutting down...")

        if self.scheduler and self.scheduler.is_running:
            await self.scheduler.stop()

        if self.database:
            await self.database.close()
            logger.info("Database connection closed")

        logger.info("Graceful shutdown complete")

    def setup_signal_handlers(self) -> None:
        """Register SIGINT/SIGTERM handlers that trigger shutdown."""
        loop = asyncio.get_running_loop()

        def signal_handler(sig: signal.Signals) -> None:
            logger.info("Received signal %s, initiating shutdown...", sig.name)
            self.request_shutdown()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))


async def main() -> None:
    """Main entry point for the gc worker."""
    config = SignedUrlConfig.from_json_file()
    configure_logging(config.log_level)
    logger.info("Configuration loaded (backend=%s)", config.storage_backend)

    app = Application(config)
    try:
        await app.setup()
        app.setup_signal_handlers()
        await app.run()
    except Exception as e:
        logger.exception("Application error: %s", e)
        raise
    finally:
        await app.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
