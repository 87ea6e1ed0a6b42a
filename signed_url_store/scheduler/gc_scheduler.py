"""Background scheduler that purges expired signed urls."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from signed_url_store.config import SignedUrlConfig
    from signed_url_store.storage.base import SignedUrlStorage

logger = logging.getLogger(__name__)


class GarbageCollectionScheduler:
    """Runs ``storage.gc()`` on a fixed interval.

    A failing pass is logged and the loop keeps going; the next pass
    picks up whatever the failed one left behind.
    """

    STOP_TIMEOUT_SECONDS = 10.0

    def __init__(
        self,
        storage: "SignedUrlStorage",
        config: "SignedUrlConfig",
    ) -> None:
        """Initialize the scheduler.

        Args:
            storage: Storage engine to collect.
            config: Application configuration (for gc_interval_seconds).
        """
        self.storage = storage
        self.config = config
        self._running = False
        self._gc_task: asyncio.Task | None = None
        self._stop_event = asyncio.Event()

    @property
    def interval_seconds(self) -> int:
        return self.config.gc_interval_seconds

    async def start(self) -> None:
        """Start the garbage collection loop."""
        if self._running:
            logger.warning("GarbageCollectionScheduler is already running")
            return

        self._running = True
        self._stop_event.clear()
        self._gc_task = asyncio.create_task(self._run_gc_loop())

        logger.info(
            "GarbageCollectionScheduler started, gc every %d seconds",
            self.interval_seconds,
        )

    async def stop(self) -> None:
        """Stop the loop, cancelling it if it does not finish in time."""
        if not self._running:
            logger.warning("GarbageCollectionScheduler is not running")
            return

        logger.info("Stopping GarbageCollectionScheduler...")
        self._running = False
        self._stop_event.set()

        if self._gc_task:
            try:
                await asyncio.wait_for(
                    self._gc_task, timeout=self.STOP_TIMEOUT_SECONDS
                )
            except asyncio.TimeoutError:
                logger.warning(
                    "Garbage collection task did not stop gracefully, cancelling"
                )
                self._gc_task.cancel()
                try:
                    await self._gc_task
                except asyncio.CancelledError:
                    pass
            finally:
                self._gc_task = None

        logger.info("GarbageCollectionScheduler stopped")

    async def run_once(self) -> None:
        """Run a single garbage collection pass."""
        await self.storage.gc()

    async def _run_gc_loop(self) -> None:
        while self._running:
            try:
                await self.run_once()
            except Exception as e:
                logger.exception("Error in garbage collection loop: %s", e)

            try:
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=self.interval_seconds,
                )
                break
            except asyncio.TimeoutError:
                continue

        logger.info("Garbage collection loop ended")

    @property
    def is_running(self) -> bool:
        """Check if the scheduler is currently running."""
        return self._running
