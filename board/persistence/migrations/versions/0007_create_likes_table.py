"""create likes table

Revision ID: 0007
Revises: 0006
Create Date: 2025-09-01 09:30:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by the schema manager.
revision: str = "0007"
down_revision: Union[str, Sequence[str], None] = "0006"


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "likes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "target_type",
            sa.Enum(
                "post",
                "comment",
                name="ck_likes_target_type",
                native_enum=False,
                create_constraint=True,
                length=20,
            ),
            nullable=False,
        ),
        # Polymorphic: resolves against posts or comments, so no foreign key
        sa.Column("target_id", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "target_type", "target_id", name="uq_likes_user_target"
        ),
    )
    op.create_index("idx_likes_target", "likes", ["target_type", "target_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_likes_target", table_name="likes")
    op.drop_table("likes")
