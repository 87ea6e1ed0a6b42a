"""Domain and ORM models."""

from signed_url_store.models.domain import SignedUrlRecord

__all__ = ["SignedUrlRecord"]
