"""Abstract signed URL storage engine."""

from abc import ABC, abstractmethod

from signed_url_store.clock import Clock
from signed_url_store.models.domain import SignedUrlRecord


class SignedUrlStorage(ABC):
    """Keyed store of signed URL records.

    Every backend must behave identically from the outside:

    - ``store`` persists a record under its identifier, replacing any
      record already stored under the same key.
    - ``consume`` checks expiry, checks the remaining usage and decrements
      (or deletes on reaching zero) as one atomic step per identifier.
      It raises ``BadIdentifier`` for unknown, expired or exhausted
      identifiers.
    - ``gc`` removes every record that is expired at the current clock
      reading and never touches a live one.

    The clock is read once per ``consume`` and once per ``gc`` call.
    """

    def __init__(self, clock: Clock):
        self._clock = clock

    @property
    def clock(self) -> Clock:
        """Get the clock used for expiry checks."""
        return self._clock

    @abstractmethod
    async def store(self, record: SignedUrlRecord) -> None:
        """Persist a record keyed by its identifier."""

    @abstractmethod
    async def consume(self, identifier: str) -> None:
        """Use up one access of the record stored under ``identifier``.

        Raises:
            BadIdentifier: If the identifier does not map to a usable record.
        """

    @abstractmethod
    async def gc(self) -> None:
        """Remove all expired records."""
