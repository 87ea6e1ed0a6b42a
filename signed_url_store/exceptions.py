"""Exceptions raised by the signed URL storage layer."""


class SignedUrlStoreError(Exception):
    """Base class for signed URL storage errors."""


class BadIdentifier(SignedUrlStoreError):
    """Raised when an identifier does not map to a usable signed URL.

    Unknown, expired and exhausted identifiers all produce the same
    message so callers cannot probe which of the three applies.
    """

    def __init__(self, identifier: str, message: str):
        super().__init__(message)
        self.identifier = identifier

    @classmethod
    def for_identifier(cls, identifier: str) -> "BadIdentifier":
        return cls(
            identifier,
            f"The identifier [{identifier}] does not exist or is no longer usable.",
        )
