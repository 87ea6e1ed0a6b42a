"""Storage layer for time-limited, usage-limited signed URLs."""

from signed_url_store.clock import Clock, SystemClock, TestClock
from signed_url_store.exceptions import BadIdentifier, SignedUrlStoreError
from signed_url_store.models.domain import SignedUrlRecord
from signed_url_store.storage import InMemorySignedUrlStorage, SignedUrlStorage

__all__ = [
    "BadIdentifier",
    "Clock",
    "InMemorySignedUrlStorage",
    "SignedUrlRecord",
    "SignedUrlStorage",
    "SignedUrlStoreError",
    "SystemClock",
    "TestClock",
]
