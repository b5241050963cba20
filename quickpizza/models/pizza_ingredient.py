"""PizzaIngredient ORM: join rows between pizzas and ingredients.

Invariants:
    - One row per (pizza, ingredient) pair
    - ON DELETE CASCADE from pizzas: pruning a pizza removes its join rows,
      no separate size limit applies here
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from quickpizza.db.base import Base


class PizzaIngredient(Base):
    __tablename__ = "pizza_ingredients"

    pizza_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("pizzas.id", ondelete="CASCADE"),
        primary_key=True,
    )
    ingredient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ingredients.id", ondelete="CASCADE"),
        primary_key=True,
    )
