"""create_signed_urls

Revision ID: 3f1c2b7d9a10
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2b7d9a10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Tolerate tables created by Database.init_db outside Alembic.
    bind = op.get_bind()
    insp = sa.inspect(bind)

    idx_expires = op.f("ix_signed_urls_expires_at")

    if not insp.has_table("signed_urls"):
        op.create_table(
            "signed_urls",
            sa.Column("identifier", sa.String(), nullable=False),
            sa.Column("target", sa.Text(), nullable=False),
            sa.Column("expires_at", sa.Integer(), nullable=False),
            sa.Column("max_usage", sa.Integer(), nullable=False),
            sa.Column("remaining_usage", sa.Integer(), nullable=False),
            sa.CheckConstraint(
                "remaining_usage >= 0", name="ck_signed_urls_remaining_usage"
            ),
            sa.PrimaryKeyConstraint("identifier"),
        )
        op.create_index(idx_expires, "signed_urls", ["expires_at"], unique=False)
        return

    existing_indexes = {i.get("name") for i in insp.get_indexes("signed_urls")}
    if idx_expires not in existing_indexes:
        op.create_index(idx_expires, "signed_urls", ["expires_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_signed_urls_expires_at"), table_name="signed_urls")
    op.drop_table("signed_urls")
