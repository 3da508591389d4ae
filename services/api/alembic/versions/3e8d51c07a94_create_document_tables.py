"""create_document_tables

Revision ID: 3e8d51c07a94
Revises:
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3e8d51c07a94"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(length=200), nullable=True),
        sa.Column("modified_by", sa.String(length=200), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "messages",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("message_type", sa.Enum("REPLY", "FEED", name="messagetype"), nullable=True),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("reply_ids_json", sa.Text(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "feeds",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("message_id", sa.String(length=100), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_feeds_message_id"), "feeds", ["message_id"], unique=False)

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("users")
    op.drop_index(op.f("ix_feeds_message_id"), table_name="feeds")
    op.drop_table("feeds")
    op.drop_table("messages")
    sa.Enum(name="messagetype").drop(op.get_bind(), checkfirst=True)
