"""Ingredient ORM: typed reference data (oil, tomato, mozzarella, topping).

Invariants:
    - type is the lookup key for Catalog.get_ingredients
    - Never pruned by the retention policy
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from quickpizza.db.base import Base


class Ingredient(Base):
    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    calories_per_slice: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    vegetarian: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
