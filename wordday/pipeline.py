# wordday/pipeline.py
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .catalog import CURATED_WORDS, FALLBACK_WORDS, select_for_date
from .logger import get_logger
from .schema import WordRecord, WordTemplate

logger = get_logger(__name__)

# AI words must be longer than this to be accepted
MIN_AI_WORD_LEN = 3

# Last line of defence when even the catalogs cannot be used.
HARDCODED_WORD = WordRecord(
    date="1970-01-01",
    word="resilient",
    phonetic="/rɪˈzɪliənt/",
    definition="Able to recover quickly from difficult conditions",
    translation="resistente, resiliente",
    examples=[
        "We need to be resilient in difficult times.",
        "The app is resilient and works even offline.",
        "Your learning journey requires resilient effort.",
    ],
    level="B2",
    source="hardcoded",
)


class WordStore(Protocol):
    async def check_connection(self) -> bool: ...
    async def get_by_date(self, ymd: str) -> Optional[WordRecord]: ...
    async def save(self, record: WordRecord) -> Optional[WordRecord]: ...


class WordGenerator(Protocol):
    async def generate(self, ymd: str) -> Optional[WordRecord]: ...


class WordResolver:
    """
    Decides which word is served for a date.

    Order of attempts:
      1. store unreachable  -> fallback word, source "database_unavailable"
      2. row for the date   -> returned as stored
      3. AI generation      -> source "ai", else curated word, source "curated"
         (if the curated bank blows up -> fallback word, "generation_error")
      4. candidate is upserted, best effort
    Anything raised on the way ends in the emergency word ("emergency"), and
    if that fails too, the hardcoded word ("hardcoded"). resolve() never raises.
    """

    def __init__(
        self,
        store: WordStore,
        generator: WordGenerator,
        curated: Sequence[WordTemplate] = CURATED_WORDS,
        fallback: Sequence[WordTemplate] = FALLBACK_WORDS,
    ):
        self.store = store
        self.generator = generator
        self.curated = curated
        self.fallback = fallback

    async def resolve(self, ymd: str) -> WordRecord:
        try:
            record = await self._resolve(ymd)
        except Exception:
            logger.exception(f"Word resolution failed for {ymd}, serving emergency word")
            record = self.emergency_word(ymd)
        logger.info(f"Serving '{record.word}' for {ymd} (source={record.source})")
        return record

    async def _resolve(self, ymd: str) -> WordRecord:
        if not await self.store.check_connection():
            logger.warning("Database unavailable, serving offline word without generation")
            return self.offline_word(ymd)

        existing = await self.store.get_by_date(ymd)
        if existing is not None:
            logger.info(f"Found stored word for {ymd}: {existing.word}")
            return existing

        logger.info(f"No stored word for {ymd}, producing a new one")
        candidate = await self.new_word(ymd)

        saved = await self.store.save(candidate)
        if saved is None:
            logger.warning(f"Could not store '{candidate.word}' for {ymd}, serving it unsaved")
            return candidate
        return saved

    def offline_word(self, ymd: str) -> WordRecord:
        return select_for_date(ymd, self.fallback, "database_unavailable")

    async def new_word(self, ymd: str) -> WordRecord:
        record = await self.ai_word(ymd)
        if record is not None:
            return record
        try:
            return self.curated_word(ymd)
        except Exception:
            logger.exception(f"Curated word bank failed for {ymd}, using fallback list")
            return select_for_date(ymd, self.fallback, "generation_error")

    async def ai_word(self, ymd: str) -> Optional[WordRecord]:
        try:
            record = await self.generator.generate(ymd)
        except Exception:
            logger.exception(f"AI generation raised for {ymd}, using curated word bank")
            return None
        if record is None:
            logger.info("AI generation unavailable or invalid, using curated word bank")
            return None
        if len(record.word) <= MIN_AI_WORD_LEN:
            logger.info(f"AI word '{record.word}' too short, using curated word bank")
            return None
        return record.model_copy(update={"date": ymd, "source": "ai"})

    def curated_word(self, ymd: str) -> WordRecord:
        return select_for_date(ymd, self.curated, "curated")

    def emergency_word(self, ymd: str) -> WordRecord:
        try:
            return select_for_date(ymd, self.curated, "emergency")
        except Exception:
            logger.exception("Curated word bank failed, serving hardcoded word")
            return HARDCODED_WORD.model_copy(update={"date": ymd})
