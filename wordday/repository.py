# wordday/repository.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import func, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, ProgrammingError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from .logger import get_logger
from .models import DailyWordRow
from .schema import WordRecord

logger = get_logger(__name__)

SEARCH_LIMIT = 50
RECENT_DEFAULT = 30

# errors the gateway turns into empty results
STORE_ERRORS = (SQLAlchemyError, OSError)


def row_to_record(row: DailyWordRow) -> WordRecord:
    return WordRecord(
        id=str(row.id) if row.id is not None else None,
        date=row.date.isoformat(),
        word=row.word,
        phonetic=row.phonetic or f"/{row.word}/",
        definition=row.definition,
        translation=row.translation,
        examples=list(row.examples or [])[:3],
        level=row.level,
        source=row.source,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_records(rows) -> List[WordRecord]:
    out: List[WordRecord] = []
    for row in rows:
        try:
            out.append(row_to_record(row))
        except ValidationError:
            logger.warning(f"Skipping malformed row for {row.date}")
    return out


def _escape_like(q: str) -> str:
    return q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _log_failure(op: str, e: BaseException) -> None:
    if isinstance(e, ProgrammingError) and "does not exist" in str(e):
        logger.error(f"{op}: table '{DailyWordRow.__tablename__}' does not exist. Run the table setup first.")
    elif isinstance(e, IntegrityError):
        logger.error(f"{op}: row rejected by a table constraint: {e.orig}")
    elif isinstance(e, (OperationalError, InterfaceError, OSError)):
        logger.warning(f"{op}: database unreachable ({e.__class__.__name__})")
    else:
        logger.error(f"{op}: {e.__class__.__name__}: {e}")


class WordsRepository:
    """
    Reads and writes daily words in PostgreSQL.

    Every method swallows store errors and returns an empty result
    (False / None / []), so "store unusable" and "no data" look the same.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker]):
        self.session_factory = session_factory

    @property
    def configured(self) -> bool:
        return self.session_factory is not None

    async def check_connection(self) -> bool:
        if not self.configured:
            logger.info("Database not configured (DATABASE_URL unset)")
            return False
        try:
            async with self.session_factory() as session:
                await session.execute(select(func.count()).select_from(DailyWordRow))
            return True
        except STORE_ERRORS as e:
            _log_failure("Connection check", e)
            return False

    async def get_by_date(self, ymd: str) -> Optional[WordRecord]:
        if not self.configured:
            return None
        try:
            day = dt.date.fromisoformat(ymd)
        except ValueError:
            logger.warning(f"Date {ymd} is not a real calendar date, nothing stored for it")
            return None
        try:
            async with self.session_factory() as session:
                res = await session.execute(select(DailyWordRow).where(DailyWordRow.date == day))
                row = res.scalar_one_or_none()
        except STORE_ERRORS as e:
            _log_failure(f"Fetch word for {ymd}", e)
            return None
        if row is None:
            return None
        records = _to_records([row])
        return records[0] if records else None

    async def save(self, record: WordRecord) -> Optional[WordRecord]:
        """Upsert on date; an existing row for that date is overwritten."""
        if not self.configured:
            logger.info("Database not configured, word not saved")
            return None
        try:
            day = dt.date.fromisoformat(record.date)
        except ValueError:
            logger.warning(f"Date {record.date} is not a real calendar date, word not saved")
            return None

        values = dict(
            date=day,
            word=record.word,
            phonetic=record.phonetic,
            definition=record.definition,
            translation=record.translation,
            examples=list(record.examples),
            level=record.level,
            source=record.source,
        )
        stmt = insert(DailyWordRow).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["date"],
            set_={
                **{k: stmt.excluded[k] for k in values if k != "date"},
                "updated_at": func.now(),
            },
        ).returning(DailyWordRow).execution_options(populate_existing=True)

        try:
            async with self.session_factory() as session:
                res = await session.execute(stmt)
                row = res.scalar_one()
                await session.commit()
        except STORE_ERRORS as e:
            _log_failure(f"Save word '{record.word}'", e)
            return None

        logger.info(f"Word saved: {row.word} ({row.date.isoformat()})")
        records = _to_records([row])
        return records[0] if records else None

    async def get_recent(self, limit: int = RECENT_DEFAULT) -> List[WordRecord]:
        if not self.configured or limit <= 0:
            return []
        try:
            async with self.session_factory() as session:
                res = await session.execute(
                    select(DailyWordRow).order_by(DailyWordRow.date.desc()).limit(limit)
                )
                rows = res.scalars().all()
        except STORE_ERRORS as e:
            _log_failure("Fetch recent words", e)
            return []
        return _to_records(rows)

    async def search(self, query: str) -> List[WordRecord]:
        """Case-insensitive substring match on word, definition and translation."""
        if not self.configured:
            return []
        pattern = f"%{_escape_like(query)}%"
        stmt = (
            select(DailyWordRow)
            .where(or_(
                DailyWordRow.word.ilike(pattern, escape="\\"),
                DailyWordRow.definition.ilike(pattern, escape="\\"),
                DailyWordRow.translation.ilike(pattern, escape="\\"),
            ))
            .order_by(DailyWordRow.date.desc())
            .limit(SEARCH_LIMIT)
        )
        try:
            async with self.session_factory() as session:
                res = await session.execute(stmt)
                rows = res.scalars().all()
        except STORE_ERRORS as e:
            _log_failure(f"Search '{query}'", e)
            return []
        return _to_records(rows)
