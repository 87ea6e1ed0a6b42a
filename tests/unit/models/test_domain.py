"""Unit tests for the SignedUrlRecord domain model."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from signed_url_store.models.domain import SignedUrlRecord

EXPIRES = datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestSignedUrlRecordCreate:
    """Tests for SignedUrlRecord.create."""

    def test_create_starts_with_full_budget(self):
        record = SignedUrlRecord.create("/foo", "sig", EXPIRES, 3)

        assert record.identifier == "sig"
        assert record.target == "/foo"
        assert record.max_usage == 3
        assert record.remaining_usage == 3

    @pytest.mark.parametrize("max_usage", [0, -1])
    def test_create_rejects_non_positive_budget(self, max_usage: int):
        with pytest.raises(ValidationError):
            SignedUrlRecord.create("/foo", "sig", EXPIRES, max_usage)

    def test_create_rejects_empty_identifier(self):
        with pytest.raises(ValidationError):
            SignedUrlRecord.create("/foo", "", EXPIRES, 1)

    def test_remaining_usage_cannot_exceed_max_usage(self):
        with pytest.raises(ValidationError):
            SignedUrlRecord(
                identifier="sig",
                target="/foo",
                expires_at=EXPIRES,
                max_usage=1,
                remaining_usage=2,
            )


class TestSignedUrlRecordExpiry:
    """Tests for expiry normalization and checks."""

    def test_naive_expiry_is_treated_as_utc(self):
        record = SignedUrlRecord.create("/foo", "sig", datetime(2030, 1, 1, 12), 1)

        assert record.expires_at == EXPIRES
        assert record.expires_at.tzinfo is not None

    def test_expiry_is_truncated_to_seconds(self):
        record = SignedUrlRecord.create(
            "/foo", "sig", EXPIRES + timedelta(microseconds=999_999), 1
        )

        assert record.expires_at == EXPIRES

    def test_other_timezones_are_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        record = SignedUrlRecord.create(
            "/foo", "sig", datetime(2030, 1, 1, 14, tzinfo=plus_two), 1
        )

        assert record.expires_at == EXPIRES
        assert record.expires_at.utcoffset() == timedelta(0)

    def test_not_expired_at_expiry_instant(self):
        record = SignedUrlRecord.create("/foo", "sig", EXPIRES, 1)

        assert record.is_expired(EXPIRES - timedelta(seconds=1)) is False
        assert record.is_expired(EXPIRES) is False
        assert record.is_expired(EXPIRES + timedelta(seconds=1)) is True

    def test_expires_at_timestamp(self):
        record = SignedUrlRecord.create("/foo", "sig", EXPIRES, 1)

        assert record.expires_at_timestamp == int(EXPIRES.timestamp())


class TestSignedUrlRecordUsage:
    """Tests for usage bookkeeping."""

    def test_consumed_returns_decremented_copy(self):
        record = SignedUrlRecord.create("/foo", "sig", EXPIRES, 2)

        updated = record.consumed()

        assert updated.remaining_usage == 1
        assert record.remaining_usage == 2
        assert updated.identifier == record.identifier

    def test_consumed_refuses_exhausted_record(self):
        record = SignedUrlRecord(
            identifier="sig",
            target="/foo",
            expires_at=EXPIRES,
            max_usage=1,
            remaining_usage=0,
        )

        with pytest.raises(ValueError):
            record.consumed()

    def test_record_is_immutable(self):
        record = SignedUrlRecord.create("/foo", "sig", EXPIRES, 2)

        with pytest.raises(ValidationError):
            record.remaining_usage = 0

    def test_json_uses_camel_case(self):
        record = SignedUrlRecord.create("/foo", "sig", EXPIRES, 2)

        payload = record.to_json()

        assert '"remainingUsage":2' in payload
        assert '"expiresAt"' in payload
