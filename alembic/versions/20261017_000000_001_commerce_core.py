"""Commerce core - users, games, balances, ledger, cart, purchases, history

Revision ID: 001
Revises: 
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def upgrade() -> None:
    """Create the storefront schema."""

    # External collaborators referenced by foreign key
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        timestamp("created_at"),
        timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "games",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0.00")),
        sa.Column("author_id", postgresql.UUID(as_uuid=True), nullable=False),
        timestamp("created_at"),
        timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], name="fk_games_author_id"),
        sa.UniqueConstraint("title", name="uq_games_title"),
        sa.CheckConstraint("price >= 0", name="ck_games_price_non_negative"),
    )
    op.create_index("ix_games_author_id", "games", ["author_id"])

    # Balance ledger
    op.create_table(
        "balances",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0.00")),
        timestamp("created_at"),
        timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_balances_user_id", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("user_id", name="uq_balances_user_id"),
        sa.CheckConstraint("amount >= 0", name="ck_balances_amount_non_negative"),
    )

    op.create_table(
        "balance_transactions",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("balance_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("operation", sa.String(20), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("balance_before", sa.Numeric(10, 2), nullable=False),
        sa.Column("balance_after", sa.Numeric(10, 2), nullable=False),
        timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["balance_id"],
            ["balances.id"],
            name="fk_balance_transactions_balance_id",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint("amount > 0", name="ck_balance_transactions_amount_positive"),
    )
    op.create_index(
        "ix_balance_transactions_balance_id_created_at",
        "balance_transactions",
        ["balance_id", "created_at"],
    )

    # Staging and ownership
    op.create_table(
        "cart_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("game_id", postgresql.UUID(as_uuid=True), nullable=False),
        timestamp("added_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_cart_items_user_id", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["game_id"], ["games.id"], name="fk_cart_items_game_id", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("user_id", "game_id", name="uq_cart_items_user_id_game_id"),
    )
    op.create_index("ix_cart_items_user_id", "cart_items", ["user_id"])

    op.create_table(
        "purchase_records",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("game_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("purchase_price", sa.Numeric(10, 2), nullable=False),
        timestamp("purchased_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_purchase_records_user_id", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["game_id"], ["games.id"], name="fk_purchase_records_game_id"),
        sa.UniqueConstraint(
            "user_id", "game_id", name="uq_purchase_records_user_id_game_id"
        ),
    )
    op.create_index("ix_purchase_records_user_id", "purchase_records", ["user_id"])
    op.create_index("ix_purchase_records_game_id", "purchase_records", ["game_id"])

    # Audit history
    op.create_table(
        "game_history",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("game_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("field_changed", sa.String(100), nullable=True),
        sa.Column("old_value", sa.String(2000), nullable=True),
        sa.Column("new_value", sa.String(2000), nullable=True),
        sa.Column("changed_by", postgresql.UUID(as_uuid=True), nullable=False),
        timestamp("changed_at"),
        sa.Column("description", sa.String(500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["game_id"], ["games.id"], name="fk_game_history_game_id", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["changed_by"], ["users.id"], name="fk_game_history_changed_by"),
    )
    op.create_index("ix_game_history_game_id", "game_history", ["game_id"])


def downgrade() -> None:
    """Drop all tables in reverse order."""
    op.drop_index("ix_game_history_game_id", table_name="game_history")
    op.drop_table("game_history")
    op.drop_index("ix_purchase_records_game_id", table_name="purchase_records")
    op.drop_index("ix_purchase_records_user_id", table_name="purchase_records")
    op.drop_table("purchase_records")
    op.drop_index("ix_cart_items_user_id", table_name="cart_items")
    op.drop_table("cart_items")
    op.drop_index(
        "ix_balance_transactions_balance_id_created_at", table_name="balance_transactions"
    )
    op.drop_table("balance_transactions")
    op.drop_table("balances")
    op.drop_index("ix_games_author_id", table_name="games")
    op.drop_table("games")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
