"""Signed URL data access operations."""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func, or_, select, update

from signed_url_store.clock import Clock
from signed_url_store.dao.base import BaseDAO
from signed_url_store.database import Database
from signed_url_store.exceptions import BadIdentifier
from signed_url_store.models.domain import SignedUrlRecord
from signed_url_store.models.orm import SignedUrlModel
from signed_url_store.storage.base import SignedUrlStorage

logger = logging.getLogger(__name__)


def _to_domain(model: SignedUrlModel) -> SignedUrlRecord:
    return SignedUrlRecord(
        identifier=model.identifier,
        target=model.target,
        expires_at=datetime.fromtimestamp(model.expires_at, tz=timezone.utc),
        max_usage=model.max_usage,
        remaining_usage=model.remaining_usage,
    )


class SignedUrlDAO(BaseDAO[SignedUrlRecord], SignedUrlStorage):
    """Signed URL storage backed by a SQL database.

    Atomicity of ``consume`` comes from a single conditional UPDATE: the
    existence, usage and expiry checks live in its WHERE clause, so the
    database row lock decides which of two racing consumers wins.

    All read methods return Pydantic SignedUrlRecord models, never
    SQLAlchemy objects.
    """

    def __init__(self, database: Database, clock: Clock):
        """Initialize DAO with database connection and clock.

        Args:
            database: Database instance for session management.
            clock: Source of the current instant.
        """
        BaseDAO.__init__(self, database)
        SignedUrlStorage.__init__(self, clock)

    async def store(self, record: SignedUrlRecord) -> None:
        """Insert a record, replacing any row with the same identifier.

        Args:
            record: Record to persist.
        """
        async with self._db.session() as session:
            await session.execute(
                delete(SignedUrlModel).where(
                    SignedUrlModel.identifier == record.identifier
                )
            )
            session.add(
                SignedUrlModel(
                    identifier=record.identifier,
                    target=record.target,
                    expires_at=record.expires_at_timestamp,
                    max_usage=record.max_usage,
                    remaining_usage=record.remaining_usage,
                )
            )

        logger.debug(
            "Stored signed url %s (max_usage=%d, expires_at=%d)",
            record.identifier,
            record.max_usage,
            record.expires_at_timestamp,
        )

    async def consume(self, identifier: str) -> None:
        """Decrement the usage of a record, deleting it at zero.

        Args:
            identifier: Identifier presented by the caller.

        Raises:
            BadIdentifier: If no live record with usage left exists.
        """
        try:
            identifier.encode("utf-8")
        except UnicodeEncodeError:
            # Such a key could never have been stored
            logger.debug("Rejected unencodable signed url identifier")
            raise BadIdentifier.for_identifier(identifier) from None

        now = int(self._clock.now().timestamp())

        async with self._db.session() as session:
            result = await session.execute(
                update(SignedUrlModel)
                .where(
                    SignedUrlModel.identifier == identifier,
                    SignedUrlModel.remaining_usage > 0,
                    SignedUrlModel.expires_at >= now,
                )
                .values(remaining_usage=SignedUrlModel.remaining_usage - 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                logger.debug("Rejected signed url %s", identifier)
                raise BadIdentifier.for_identifier(identifier)

            await session.execute(
                delete(SignedUrlModel)
                .where(
                    SignedUrlModel.identifier == identifier,
                    SignedUrlModel.remaining_usage <= 0,
                )
                .execution_options(synchronize_session=False)
            )

        logger.debug("Consumed signed url %s", identifier)

    async def gc(self) -> None:
        """Delete expired records and any left with no usage."""
        now = int(self._clock.now().timestamp())

        async with self._db.session() as session:
            result = await session.execute(
                delete(SignedUrlModel)
                .where(
                    or_(
                        SignedUrlModel.expires_at < now,
                        SignedUrlModel.remaining_usage <= 0,
                    )
                )
                .execution_options(synchronize_session=False)
            )

        if result.rowcount:
            logger.info(
                "Garbage collected %d expired or exhausted signed urls",
                result.rowcount,
            )

    async def get(self, identifier: str) -> SignedUrlRecord | None:
        """Get the stored record for an identifier.

        No expiry check is applied; this reflects what is physically stored.

        Args:
            identifier: Identifier to look up.

        Returns:
            SignedUrlRecord if a row exists, None otherwise.
        """
        async with self._db.session() as session:
            result = await session.execute(
                select(SignedUrlModel).where(SignedUrlModel.identifier == identifier)
            )
            model = result.scalar_one_or_none()
            if model is None:
                return None
            return _to_domain(model)

    async def count(self) -> int:
        """Count stored rows, expired ones included."""
        async with self._db.session() as session:
            result = await session.execute(
                select(func.count()).select_from(SignedUrlModel)
            )
            return result.scalar_one()
