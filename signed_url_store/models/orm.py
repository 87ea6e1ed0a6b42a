"""SQLAlchemy ORM models.

These models define the database schema. The DAO converts them to
Pydantic domain models before returning; SQLAlchemy objects never leak
outside the DAO layer.
"""

from sqlalchemy import CheckConstraint, Column, Integer, String, Text

from signed_url_store.database import Base


class SignedUrlModel(Base):
    """Signed URL ORM model.

    ``expires_at`` holds integer epoch seconds so that expiry checks are
    plain integer comparisons on every backend.
    """

    __tablename__ = "signed_urls"
    __table_args__ = (
        CheckConstraint("remaining_usage >= 0", name="ck_signed_urls_remaining_usage"),
    )

    identifier = Column(String, primary_key=True)
    target = Column(Text, nullable=False)
    expires_at = Column(Integer, nullable=False, index=True)
    max_usage = Column(Integer, nullable=False)
    remaining_usage = Column(Integer, nullable=False)
