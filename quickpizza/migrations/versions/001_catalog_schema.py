"""Catalog schema: doughs, ingredients, tools, users, pizzas, pizza_ingredients.

Revision ID: 001_catalog
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_catalog"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "doughs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("calories_per_slice", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("calories_per_slice", sa.Integer, nullable=False, server_default="0"),
        sa.Column("vegetarian", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("type", sa.String(32), nullable=False),
    )
    op.create_index("ix_ingredients_type", "ingredients", ["type"])

    op.create_table(
        "tools",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(64), nullable=False),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("username", sa.String(32), nullable=False, unique=True),
        sa.Column("token", sa.String(16), nullable=False, unique=True),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "pizzas",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("tool", sa.String(64), nullable=False, server_default=""),
        sa.Column("dough_id", sa.Integer, sa.ForeignKey("doughs.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_pizzas_created_at", "pizzas", ["created_at"])

    op.create_table(
        "pizza_ingredients",
        sa.Column("pizza_id", sa.Integer, sa.ForeignKey("pizzas.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("ingredient_id", sa.Integer, sa.ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table("pizza_ingredients")
    op.drop_index("ix_pizzas_created_at", "pizzas")
    op.drop_table("pizzas")
    op.drop_table("users")
    op.drop_table("tools")
    op.drop_index("ix_ingredients_type", "ingredients")
    op.drop_table("ingredients")
    op.drop_table("doughs")
