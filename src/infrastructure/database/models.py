"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text, false
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Largest value an Integer primary key holds on every supported backend (int4)
MAX_TODO_ID = 2**31 - 1


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class TodoModel(Base):
    """Todo/Task model.

    Timestamps are written by the repository rather than by column defaults,
    so the values returned from a save are exactly the ones stored.
    """

    __tablename__ = "todos"
    # AUTOINCREMENT keeps SQLite from reusing the id of a deleted last row
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    done: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
