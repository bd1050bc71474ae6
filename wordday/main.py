# wordday/main.py
from __future__ import annotations

import re
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

import pytz
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from .catalog import recent_from_catalog, search_catalog
from .config import settings
from .db_pg import create_tables, make_engine, make_sessionmaker, ping
from .hf_client import HFWordGenerator
from .logger import get_logger, setup_logger
from .pipeline import WordResolver
from .repository import WordsRepository
from .schema import DATE_PATTERN, DatabaseStatus, WordRecord

# ───────── Config ─────────
TZ = pytz.timezone(settings.APP_TIMEZONE)
MIN_QUERY_LEN = 2
HISTORY_DEFAULT_DAYS, HISTORY_MAX_DAYS = 30, 60
STATUS_SAMPLE_DATE = "2024-01-01"      # seeded by the table setup script

_DATE_RE = re.compile(DATE_PATTERN)

logger = get_logger(__name__)


# ───────── Lifecycle ─────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    engine = make_engine(settings.DATABASE_URL)
    app.state.session_factory = make_sessionmaker(engine)
    if engine is None:
        logger.warning("DATABASE_URL not set, words will not be stored")
    else:
        try:
            await ping(engine)
            if settings.DB_CREATE_TABLES:
                await create_tables(engine)
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Database not reachable at startup ({e.__class__.__name__}), serving offline words until it is")
    if not settings.HUGGINGFACE_API_KEY:
        logger.info("HUGGINGFACE_API_KEY not set, serving curated words only")
    yield
    if engine is not None:
        await engine.dispose()


# ───────── App ─────────
app = FastAPI(title="Word of the Day API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


# ───────── Dependencies ─────────
def get_repository(request: Request) -> WordsRepository:
    return WordsRepository(getattr(request.app.state, "session_factory", None))


def get_generator() -> HFWordGenerator:
    return HFWordGenerator.from_settings()


def get_resolver(
    repo: WordsRepository = Depends(get_repository),
    generator: HFWordGenerator = Depends(get_generator),
) -> WordResolver:
    return WordResolver(repo, generator)


def today() -> str:
    return datetime.now(TZ).strftime("%Y-%m-%d")


# ───────── Routes ─────────
@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.get("/api/word-of-the-day", response_model=WordRecord)
async def word_of_the_day(resolver: WordResolver = Depends(get_resolver)):
    return await resolver.resolve(today())


@app.get("/api/word/{date}", response_model=WordRecord)
async def word_for_date(date: str, resolver: WordResolver = Depends(get_resolver)):
    if not _DATE_RE.match(date):
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")
    return await resolver.resolve(date)


@app.get("/api/database-status", response_model=DatabaseStatus)
async def database_status(repo: WordsRepository = Depends(get_repository)):
    try:
        if not await repo.check_connection():
            return DatabaseStatus(
                status="disconnected",
                connection=False,
                hasData=False,
                message="Database connection failed",
            )
        sample = await repo.get_by_date(STATUS_SAMPLE_DATE)
        return DatabaseStatus(
            status="connected",
            connection=True,
            hasData=sample is not None,
            message="Database is connected and accessible",
        )
    except Exception as e:
        logger.exception("Database status check failed")
        return DatabaseStatus(status="error", connection=False, hasData=False, message=str(e) or "Unknown error")


@app.get("/api/words/search", response_model=List[WordRecord])
async def search_words(
    q: Optional[str] = Query(None, description="Text to look for in word, definition or translation"),
    repo: WordsRepository = Depends(get_repository),
):
    query = (q or "").strip()
    if len(query) < MIN_QUERY_LEN:
        raise HTTPException(status_code=400, detail="Query must be at least 2 characters long")

    if not await repo.check_connection():
        logger.info("Database unavailable, searching the offline word list")
        return search_catalog(query)

    words = await repo.search(query)
    if words:
        return words
    # nothing stored matches: try the offline list
    return search_catalog(query)


@app.get("/api/words/history", response_model=List[WordRecord])
async def history(
    days: int = Query(HISTORY_DEFAULT_DAYS, description="How many recent days to return (max 60)"),
    repo: WordsRepository = Depends(get_repository),
):
    days = max(0, min(days, HISTORY_MAX_DAYS))

    if not await repo.check_connection():
        logger.info("Database unavailable, serving offline history")
        return recent_from_catalog(days)

    words = await repo.get_recent(days)
    if words:
        return words
    return recent_from_catalog(days)
