"""
Pytest configuration and fixtures
"""
from unittest.mock import AsyncMock

import pytest

from wordday.schema import WordRecord, WordTemplate


def make_record(**overrides) -> WordRecord:
    data = dict(
        date="2024-01-03",
        word="eloquent",
        phonetic="/ˈeləkwənt/",
        definition="Fluent and persuasive in speaking or writing",
        translation="elocuente, persuasivo",
        examples=["Her eloquent speech moved the entire audience."],
        level="C1",
        source="manual",
    )
    data.update(overrides)
    return WordRecord(**data)


@pytest.fixture
def catalog30():
    """Thirty distinct curated entries: word00 .. word29."""
    return tuple(
        WordTemplate(
            word=f"word{i:02d}",
            phonetic=f"/word{i:02d}/",
            definition=f"Definition number {i}",
            translation=f"traducción {i}",
            examples=(f"Example sentence {i}.",),
            level="B2",
        )
        for i in range(30)
    )


@pytest.fixture
def store():
    """Connected store with no rows; save() echoes the record back."""
    s = AsyncMock()
    s.check_connection.return_value = True
    s.get_by_date.return_value = None
    s.save.side_effect = lambda record: record
    return s


@pytest.fixture
def generator():
    """Generator with no credential configured."""
    g = AsyncMock()
    g.generate.return_value = None
    return g
