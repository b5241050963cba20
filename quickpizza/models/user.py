"""User ORM: registered demo users.

Invariants:
    - username is unique; token is unique and generated server-side
    - password (plaintext) is a transient attribute, never a column; it is
      cleared by the catalog once the digest is computed
    - id is AUTOINCREMENT on SQLite so pruned ids are never reused

Design Decisions:
    - password declared as a plain class attribute: the declarative constructor
      accepts it (User(username=..., password=...)) while the mapper ignores it
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from quickpizza.db.base import Base

TOKEN_LENGTH = 16


class User(Base):
    """A demo user; never mutated after registration."""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True,
    )
    token: Mapped[str] = mapped_column(
        String(TOKEN_LENGTH), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    password = ""
