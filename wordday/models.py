# wordday/models.py
from __future__ import annotations

import uuid
import datetime as dt

from sqlalchemy import CheckConstraint, Date, DateTime, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from .db_pg import Base
from .schema import LEVELS, SOURCES


def _in(column: str, values) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


class DailyWordRow(Base):
    __tablename__ = "daily_words"
    __table_args__ = (
        CheckConstraint(_in("level", LEVELS), name="daily_words_level_check"),
        CheckConstraint(_in("source", SOURCES), name="daily_words_source_check"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # one canonical word per calendar date
    date: Mapped[dt.date] = mapped_column(Date, unique=True, nullable=False, index=True)

    word: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    phonetic: Mapped[str | None] = mapped_column(String(200), nullable=True)
    definition: Mapped[str] = mapped_column(Text, nullable=False)
    translation: Mapped[str] = mapped_column(String(500), nullable=False)
    examples: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    level: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    source: Mapped[str] = mapped_column(String(50), nullable=False, default="ai")

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
