"""StrEnum definitions for type-safe constants."""

from enum import StrEnum


class StorageBackend(StrEnum):
    """Supported signed URL storage backends."""

    MEMORY = "memory"
    DATABASE = "database"
