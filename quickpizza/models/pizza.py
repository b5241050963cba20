"""Pizza ORM: a recorded recommendation.

Invariants:
    - dough_id is required and copied from pizza.dough before insertion
    - dough/ingredients relationships are read-only: join rows are written
      explicitly by Catalog.record_recommendation, one per ingredient
    - id is AUTOINCREMENT on SQLite so pruned ids are never reused

Design Decisions:
    - dough_id denormalized onto the row: history queries filter/join without
      touching pizza_ingredients
    - viewonly relationships: the caller hands in Dough/Ingredient objects that
      may be detached or transient; the ORM must never try to persist them
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quickpizza.db.base import Base


class Pizza(Base):
    __tablename__ = "pizzas"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    tool: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    dough_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("doughs.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )

    dough: Mapped["Dough"] = relationship("Dough", viewonly=True)
    ingredients: Mapped[list["Ingredient"]] = relationship(
        "Ingredient", secondary="pizza_ingredients", viewonly=True,
    )
