"""Seed reference data: doughs, ingredients, tools and the default user.

Revision ID: 002_seed
Revises: 001_catalog
Create Date: 2026-10-17

"""
from datetime import datetime, timezone
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from passlib.hash import pbkdf2_sha256

revision: str = "002_seed"
down_revision: Union[str, None] = "001_catalog"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_USERNAME = "default"
DEFAULT_PASSWORD = "12345678"
DEFAULT_TOKEN = "abcdef0123456789"

DOUGHS = [
    ("Thin", 150),
    ("Thick", 200),
    ("Stuffed", 250),
    ("Gluten Free", 140),
]

INGREDIENTS = [
    ("Extra-virgin olive oil", 40, True, "oil"),
    ("Garlic-infused oil", 40, True, "oil"),
    ("Chili oil", 45, True, "oil"),
    ("Tomato sauce", 10, True, "tomato"),
    ("San Marzano tomatoes", 12, True, "tomato"),
    ("Cherry tomatoes", 8, True, "tomato"),
    ("Mozzarella", 80, True, "mozzarella"),
    ("Buffalo mozzarella", 90, True, "mozzarella"),
    ("Vegan mozzarella", 70, True, "mozzarella"),
    ("Pepperoni", 60, False, "topping"),
    ("Ham", 45, False, "topping"),
    ("Anchovies", 30, False, "topping"),
    ("Mushrooms", 5, True, "topping"),
    ("Bell peppers", 5, True, "topping"),
    ("Black olives", 15, True, "topping"),
    ("Pineapple", 12, True, "topping"),
    ("Basil", 1, True, "topping"),
]

TOOLS = ["Knife", "Pizza cutter", "Scissors", "Fork"]


def upgrade() -> None:
    doughs = sa.table(
        "doughs",
        sa.column("name", sa.String), sa.column("calories_per_slice", sa.Integer),
    )
    ingredients = sa.table(
        "ingredients",
        sa.column("name", sa.String), sa.column("calories_per_slice", sa.Integer),
        sa.column("vegetarian", sa.Boolean), sa.column("type", sa.String),
    )
    tools = sa.table("tools", sa.column("name", sa.String))
    users = sa.table(
        "users",
        sa.column("username", sa.String), sa.column("token", sa.String),
        sa.column("password_hash", sa.Text),
        sa.column("created_at", sa.DateTime(timezone=True)),
    )

    op.bulk_insert(doughs, [
        {"name": name, "calories_per_slice": calories}
        for name, calories in DOUGHS
    ])
    op.bulk_insert(ingredients, [
        {
            "name": name, "calories_per_slice": calories,
            "vegetarian": vegetarian, "type": kind,
        }
        for name, calories, vegetarian, kind in INGREDIENTS
    ])
    op.bulk_insert(tools, [{"name": name} for name in TOOLS])
    op.bulk_insert(users, [{
        "username": DEFAULT_USERNAME,
        "token": DEFAULT_TOKEN,
        "password_hash": pbkdf2_sha256.hash(DEFAULT_PASSWORD),
        "created_at": datetime.now(timezone.utc),
    }])


def downgrade() -> None:
    op.execute(sa.text("DELETE FROM users WHERE username = :u").bindparams(u=DEFAULT_USERNAME))
    op.execute(sa.text("DELETE FROM tools"))
    op.execute(sa.text("DELETE FROM ingredients"))
    op.execute(sa.text("DELETE FROM doughs"))
