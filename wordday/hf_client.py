# wordday/hf_client.py
from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from .config import settings
from .logger import get_logger
from .schema import LEVELS, WordRecord

logger = get_logger(__name__)

DEFAULT_LEVEL = "B2"
MIN_EXAMPLES = 2
MAX_EXAMPLES = 3

_FENCE = re.compile(r"```(?:json)?\s*")

PROMPT_TEMPLATE = """You are an English vocabulary teacher. I will give you an English word, and you need to provide detailed information about it in JSON format.

Word: "{word}"

Please respond with ONLY a valid JSON object in this exact format (no additional text, no markdown, no code blocks):

{{
  "word": "{word}",
  "phonetic": "[IPA phonetic transcription with forward slashes]",
  "definition": "[clear, concise definition in English]",
  "translation": "[Spanish translation]",
  "examples": [
    "[example sentence using the word]",
    "[another example sentence using the word]",
    "[third example sentence using the word]"
  ],
  "level": "[B2 or C1 based on word difficulty]"
}}

Requirements:
- Use proper IPA phonetic notation with forward slashes
- Provide a clear, educational definition
- Give accurate Spanish translation
- Create 3 realistic example sentences
- Assign appropriate level (B2 for intermediate-advanced, C1 for advanced)
- Respond with ONLY the JSON object, no other text

Generate the information for the word "{word}":"""


def build_prompt(word: str) -> str:
    return PROMPT_TEMPLATE.format(word=word)


def _non_empty_str(v: Any) -> Optional[str]:
    if isinstance(v, str) and v.strip():
        return v.strip()
    return None


def extract_json_object(content: str) -> Dict[str, Any]:
    """
    Pull the JSON object out of a model reply.

    Code fences are removed and the text between the first "{" and the last
    "}" is parsed, so prose around the object is tolerated.

    Raises:
        ValueError: no object found or the slice is not valid JSON
    """
    clean = _FENCE.sub("", content.strip())
    start, end = clean.find("{"), clean.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("No JSON object in model response")
    data = json.loads(clean[start:end + 1])
    if not isinstance(data, dict):
        raise ValueError("Model response JSON is not an object")
    return data


def parse_word_json(content: str, ymd: str) -> Optional[WordRecord]:
    """Turn a raw model reply into a complete WordRecord, or None."""
    try:
        data = extract_json_object(content)
    except ValueError as e:
        logger.warning(f"Could not parse model response as JSON: {e}")
        return None

    word = _non_empty_str(data.get("word"))
    definition = _non_empty_str(data.get("definition"))
    translation = _non_empty_str(data.get("translation"))
    examples = data.get("examples")

    if not (word and definition and translation):
        logger.warning("Model response is missing word, definition or translation")
        return None
    if not isinstance(examples, list) or len(examples) < MIN_EXAMPLES:
        logger.warning(f"Model response has fewer than {MIN_EXAMPLES} examples")
        return None

    kept = [_non_empty_str(e) for e in examples[:MAX_EXAMPLES]]
    if not all(kept):
        logger.warning("Model response has empty or non-text examples")
        return None

    level = data.get("level")
    level = level.strip().upper() if isinstance(level, str) else ""
    if level not in LEVELS:
        level = DEFAULT_LEVEL

    try:
        return WordRecord(
            date=ymd,
            word=word,
            phonetic=_non_empty_str(data.get("phonetic")) or f"/{word}/",
            definition=definition,
            translation=translation,
            examples=kept,
            level=level,
            source="ai",
        )
    except ValidationError as e:
        logger.warning(f"Model response failed validation: {e.error_count()} error(s)")
        return None


class HFWordGenerator:
    """
    Generates a fresh word of the day with a Hugging Face hosted chat model.

    A seed word comes from the random word API and the model fills in the
    rest. One attempt per call; every failure ends in None.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        api_base: Optional[str] = None,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
        random_word_url: Optional[str] = None,
        random_word_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        # unset arguments are read from settings at construction time
        model = model or settings.HF_MODEL
        provider = provider if provider is not None else settings.HF_PROVIDER
        self.api_key = api_key
        self.api_base = (api_base or settings.HF_API_BASE).rstrip("/")
        self.model = f"{model}:{provider}" if provider else model
        self.temperature = temperature if temperature is not None else settings.HF_TEMPERATURE
        self.timeout = timeout if timeout is not None else settings.HF_TIMEOUT
        self.random_word_url = random_word_url or settings.RANDOM_WORD_API_URL
        self.random_word_timeout = (
            random_word_timeout if random_word_timeout is not None else settings.RANDOM_WORD_TIMEOUT
        )
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "HFWordGenerator":
        return cls(
            api_key=settings.HUGGINGFACE_API_KEY,
            api_base=settings.HF_API_BASE,
            model=settings.HF_MODEL,
            provider=settings.HF_PROVIDER,
            temperature=settings.HF_TEMPERATURE,
            timeout=settings.HF_TIMEOUT,
            random_word_url=settings.RANDOM_WORD_API_URL,
            random_word_timeout=settings.RANDOM_WORD_TIMEOUT,
        )

    def is_available(self) -> bool:
        return bool(self.api_key)

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    async def fetch_random_word(self) -> Optional[str]:
        try:
            async with self._client(self.random_word_timeout) as client:
                r = await client.get(self.random_word_url, headers={"accept": "application/json"})
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPError as e:
            logger.warning(f"Random word API request failed: {e.__class__.__name__}: {e}")
            return None
        except ValueError:
            logger.warning("Random word API returned a non-JSON body")
            return None

        if isinstance(data, list) and data and isinstance(data[0], str) and data[0].strip():
            return data[0].strip().lower()

        logger.warning("Invalid response format from random word API")
        return None

    async def complete(self, prompt: str) -> Optional[str]:
        """Single chat completion; returns the assistant message text."""
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
        }
        headers = {
            "accept": "application/json",
            "authorization": f"Bearer {self.api_key}",
        }
        try:
            async with self._client(self.timeout) as client:
                r = await client.post(f"{self.api_base}/chat/completions", json=payload, headers=headers)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPError as e:
            logger.warning(f"Chat completion failed: {e.__class__.__name__}: {e}")
            return None
        except ValueError:
            logger.warning("Chat completion returned a non-JSON body")
            return None

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Chat completion response has no message content")
            return None
        return content if isinstance(content, str) and content.strip() else None

    async def generate(self, ymd: str) -> Optional[WordRecord]:
        if not self.is_available():
            logger.info("Hugging Face API key not configured, skipping AI generation")
            return None
        try:
            return await self._generate(ymd)
        except Exception as e:
            logger.warning(f"AI generation failed for {ymd}: {e.__class__.__name__}")
            return None

    async def _generate(self, ymd: str) -> Optional[WordRecord]:
        seed = await self.fetch_random_word()
        if not seed:
            return None
        logger.info(f"Generating word for {ymd} from seed '{seed}'")

        content = await self.complete(build_prompt(seed))
        if content is None:
            return None

        record = parse_word_json(content, ymd)
        if record:
            logger.info(f"AI generated word: {record.word} ({record.level})")
        return record
