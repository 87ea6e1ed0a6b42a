"""Scheduler module for periodic garbage collection of signed urls."""

from signed_url_store.scheduler.gc_scheduler import GarbageCollectionScheduler

__all__ = ["GarbageCollectionScheduler"]
