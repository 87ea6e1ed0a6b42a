"""Signed URL storage engines."""

from signed_url_store.storage.base import SignedUrlStorage
from signed_url_store.storage.memory_storage import InMemorySignedUrlStorage

__all__ = ["InMemorySignedUrlStorage", "SignedUrlStorage"]
