"""Reusable behavioral tests for signed url storage backends."""

from signed_url_store.testing.storage_tests import SignedUrlStorageTests

__all__ = ["SignedUrlStorageTests"]
