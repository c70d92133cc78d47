"""Create users and thoughts tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `users` and `thoughts` tables with their unique indexes,
       sort indexes and the non-negative hearts constraint.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("password_hash", sa.String(128), nullable=False),
        sa.Column("access_token", sa.String(256), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_access_token", "users", ["access_token"], unique=True)

    op.create_table(
        "thoughts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("message", sa.String(140), nullable=False),
        sa.Column("hearts", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        # Owner reference without a foreign key: thoughts outlive their users
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("hearts >= 0", name="ck_thoughts_hearts_non_negative"),
    )
    op.create_index("idx_thoughts_created_at", "thoughts", ["created_at"])
    op.create_index("idx_thoughts_hearts", "thoughts", ["hearts"])
    op.create_index("ix_thoughts_user_id", "thoughts", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_thoughts_user_id", table_name="thoughts")
    op.drop_index("idx_thoughts_hearts", table_name="thoughts")
    op.drop_index("idx_thoughts_created_at", table_name="thoughts")
    op.drop_table("thoughts")
    op.drop_index("ix_users_access_token", table_name="users")
    op.drop_table("users")
