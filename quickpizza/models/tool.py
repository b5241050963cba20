"""Tool ORM: utensils a recommendation may suggest."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from quickpizza.db.base import Base


class Tool(Base):
    __tablename__ = "tools"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
