"""Rating ORM: a user's star rating of a recorded pizza.

Invariants:
    - stars in 1..5 (checked by core/validation.py before insert)
    - Scoped by user_id; cascades away with its user or pizza
    - Bounded by the ratings retention policy
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from quickpizza.db.base import Base


class Rating(Base):
    __tablename__ = "ratings"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    stars: Mapped[int] = mapped_column(Integer, nullable=False)
    pizza_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("pizzas.id", ondelete="CASCADE"), nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
