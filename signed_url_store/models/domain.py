"""Pydantic domain models.

Storage engines accept and keep these models. SQLAlchemy ORM objects
never leave the DAO layer; they are converted to these models first.
"""

from datetime import datetime, timezone

from pydantic import ConfigDict, Field, field_validator, model_validator

from signed_url_store.models.base import JsonModel


class SignedUrlRecord(JsonModel):
    """Persisted state of one signed URL.

    The identifier is derived by the issuer (usually the signature) and is
    opaque to storage. ``remaining_usage`` is the only field that changes
    over the record's lifetime, and only storage engines change it.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(min_length=1)
    target: str
    expires_at: datetime
    max_usage: int = Field(gt=0)
    remaining_usage: int = Field(ge=0)

    @field_validator("expires_at")
    @classmethod
    def _normalize_expires_at(cls, value: datetime) -> datetime:
        # Naive instants are UTC; resolution is whole seconds.
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.replace(microsecond=0)

    @model_validator(mode="after")
    def _check_usage_budget(self) -> "SignedUrlRecord":
        if self.remaining_usage > self.max_usage:
            raise ValueError("remaining_usage cannot exceed max_usage")
        return self

    @classmethod
    def create(
        cls,
        target: str,
        identifier: str,
        expires_at: datetime,
        max_usage: int,
    ) -> "SignedUrlRecord":
        """Build a freshly issued record with its full usage budget."""
        return cls(
            identifier=identifier,
            target=target,
            expires_at=expires_at,
            max_usage=max_usage,
            remaining_usage=max_usage,
        )

    @property
    def expires_at_timestamp(self) -> int:
        """Expiry as integer seconds since the epoch."""
        return int(self.expires_at.timestamp())

    def is_expired(self, now: datetime) -> bool:
        """Check whether the record is expired at ``now``.

        The expiry second itself is still valid; the record expires once
        ``now`` is strictly past ``expires_at``.
        """
        return self.expires_at < now

    def consumed(self) -> "SignedUrlRecord":
        """Return a copy with one usage taken off."""
        if self.remaining_usage < 1:
            raise ValueError("record has no remaining usage")
        return self.model_copy(update={"remaining_usage": self.remaining_usage - 1})
