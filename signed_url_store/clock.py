"""Clock abstraction for injectable time source."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant.

    Storage engines depend on this interface rather than reading the
    system time directly.
    """

    def now(self) -> datetime:
        """Return the current UTC instant."""
        ...


class SystemClock:
    """Production clock backed by the system UTC time, in whole seconds."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(microsecond=0)


class TestClock:
    """Deterministic clock that only moves when told to.

    Starts at the current system time (or ``start``) and is moved forward
    with ``advance``.
    """

    # Keep pytest from collecting this as a test class.
    __test__ = False

    def __init__(self, start: datetime | None = None) -> None:
        if start is None:
            start = SystemClock().now()
        elif start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
        self._now = start.replace(microsecond=0)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: int) -> None:
        """Move the clock forward.

        Args:
            seconds: Positive number of seconds to travel into the future.

        Raises:
            ValueError: If seconds is not a positive integer.
        """
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 1:
            raise ValueError(f"seconds must be a positive integer, got {seconds!r}")
        self._now = self._now + timedelta(seconds=seconds)
