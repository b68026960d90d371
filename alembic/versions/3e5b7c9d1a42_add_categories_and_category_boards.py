"""add categories and category_boards

Revision ID: 3e5b7c9d1a42
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

from backend.app.config import prefixed


# revision identifiers, used by Alembic.
revision = "3e5b7c9d1a42"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    categories = prefixed("categories")
    category_boards = prefixed("category_boards")

    op.create_table(
        categories,
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("team_id", sa.String(length=36), nullable=False),
        sa.Column("type", sa.String(length=10), nullable=False),
        sa.Column("collapsed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("create_at", sa.BigInteger(), nullable=False),
        sa.Column("update_at", sa.BigInteger(), nullable=False),
        sa.Column("delete_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(f"ix_{categories}_user_team", categories, ["user_id", "team_id"], unique=False)

    op.create_table(
        category_boards,
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("category_id", sa.String(length=36), nullable=False),
        sa.Column("board_id", sa.String(length=36), nullable=False),
        sa.Column("create_at", sa.BigInteger(), nullable=False),
        sa.Column("update_at", sa.BigInteger(), nullable=False),
        sa.Column("delete_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # Not unique: duplicates have to remain detectable by the store.
    op.create_index(f"ix_{category_boards}_user_board", category_boards, ["user_id", "board_id"], unique=False)
    op.create_index(
        f"ix_{category_boards}_category_delete",
        category_boards,
        ["category_id", "delete_at"],
        unique=False,
    )


def downgrade() -> None:
    categories = prefixed("categories")
    category_boards = prefixed("category_boards")

    op.drop_index(f"ix_{category_boards}_category_delete", table_name=category_boards)
    op.drop_index(f"ix_{category_boards}_user_board", table_name=category_boards)
    op.drop_table(category_boards)
    op.drop_index(f"ix_{categories}_user_team", table_name=categories)
    op.drop_table(categories)
