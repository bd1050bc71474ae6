from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

Level = Literal["A1", "A2", "B1", "B2", "C1", "C2"]
LEVELS: tuple[str, ...] = get_args(Level)

Source = Literal[
    "ai",
    "curated",
    "manual",
    "fallback",
    "database_unavailable",
    "emergency",
    "hardcoded",
    "ai_fallback",
    "generation_error",
]
SOURCES: tuple[str, ...] = get_args(Source)


class WordTemplate(BaseModel):
    """Catalog entry: a word with no date or provenance bound yet."""
    model_config = ConfigDict(frozen=True)

    word: str = Field(min_length=1)
    phonetic: str
    definition: str = Field(min_length=1)
    translation: str = Field(min_length=1)
    examples: tuple[str, ...] = Field(min_length=1, max_length=3)
    level: Level = "B2"


class WordRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    date: str = Field(pattern=DATE_PATTERN)
    word: str = Field(min_length=1)
    phonetic: str
    definition: str = Field(min_length=1)
    translation: str = Field(min_length=1)
    examples: list[str] = Field(min_length=1, max_length=3)
    level: Level = "B2"
    source: Source
    # assigned by the store only
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DatabaseStatus(BaseModel):
    status: Literal["connected", "disconnected", "error"]
    connection: bool
    hasData: bool
    message: str
