"""Dough ORM: read-mostly reference data, never pruned."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from quickpizza.db.base import Base


class Dough(Base):
    __tablename__ = "doughs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    calories_per_slice: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
