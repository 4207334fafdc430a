"""Shared test fixtures and configuration."""

import logging

import pytest

from hymnal_search.domain.model import Document
from hymnal_search.search.indexer import build_index


# Settings read these from the environment; tests must not inherit them.
SETTINGS_ENV_VARS = (
    "LOG_LEVEL",
    "LOG_JSON",
    "CATALOG_PATH",
    "WEIGHT_TITLE",
    "WEIGHT_LYRICS",
    "WEIGHT_AUTHOR",
    "WEIGHT_TUNE",
    "WEIGHT_SCRIPTURE",
    "WEIGHT_METER",
    "PHRASE_TITLE_BOOST",
    "PHRASE_LYRICS_BOOST",
    "EXACT_NUMBER_BOOST",
    "MAX_PREFIX_EXPANSIONS",
    "RESULT_LIMIT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Clear settings variables and run from an empty directory (no stray .env)."""
    for key in SETTINGS_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def restore_root_logger():
    """Undo handler/level changes made by configure_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def hymns() -> list[Document]:
    """Small hymn corpus covering titles, lyrics, metadata and odd labels."""
    return [
        Document(
            id="h1",
            number="1",
            title="Amazing Grace",
            lyrics="Amazing grace! How sweet the sound\nThat saved a wretch like me",
            author="John Newton",
            tune="New Britain",
            meter="CM",
            scripture="Ephesians 2:8",
            topics=["Grace", "Salvation"],
        ),
        Document(
            id="h2",
            number="2",
            title="Grace Greater than Our Sin",
            lyrics="Marvelous grace of our loving Lord,\nGrace that exceeds our sin and our guilt",
            author="Julia H. Johnston",
            tune="Moody",
            meter="Irregular",
        ),
        Document(
            id="h3",
            number="3",
            title="It Is Well with My Soul",
            lyrics="When peace like a river attendeth my way\nIt is well, it is well with my soul",
            author="Horatio Spafford",
            tune="Ville du Havre",
        ),
        Document(
            id="h4",
            number="10",
            title="Gracious Spirit, Dwell with Me",
            lyrics="Gracious Spirit, dwell with me\nMake me graceful and free",
            author="Thomas Lynch",
        ),
        Document(
            id="h5",
            title="Café Song",
            lyrics="Singing in the café of heaven",
            author="Anonymous",
        ),
        Document(
            id="h6",
            number="12",
            title="Stanzas Apart",
            lyrics="Amazing love, how can it be\n\nGrace abounding, full and free",
            author="Charles Wesley",
        ),
    ]


@pytest.fixture
def hymn_index(hymns):
    return build_index(hymns)
