"""Shared fixtures: a fresh SQLite database and content directory per test."""

import json
import logging
from pathlib import Path

import pytest
from sqlalchemy.orm import Session

from mcqbank.core.config_file import get_settings
from mcqbank.core.db.session import Base, create_db_engine, create_session_factory, get_engine
from tests.helpers import make_candidate


def _reset_cached_state() -> None:
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Drop cached settings/engine and handlers installed by setup_logging."""
    for name in (
        "DATABASE_URL",
        "CONTENT_DIR",
        "SEED_BATCH_SIZE",
        "SEED_DEFAULT_DIFFICULTY",
        "SAMPLE_MARKERS",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    _reset_cached_state()
    yield
    _reset_cached_state()
    logger = logging.getLogger("mcqbank")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def engine(tmp_path):
    """Engine for a throwaway SQLite file with all tables created."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory) -> Session:
    """Database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """Small content tree with one module fully populated and one without files.

    - focs/FOCS2: three valid questions
    - focs/FOCS3: one valid question and one with no options
    - msk/MSK1: no content file
    """
    root = tmp_path / "content"
    questions = root / "questions"
    questions.mkdir(parents=True)

    catalog = {
        "modules": [
            {
                "id": "focs",
                "name": "Fundamentals",
                "description": "Fundamental concepts in medical sciences",
                "is_premium": False,
                "topics": [
                    {"id": "FOCS2", "name": "Fundamentals 2", "file": "focs2.json"},
                    {"id": "FOCS3", "name": "Fundamentals 3", "file": "focs3.json"},
                ],
            },
            {
                "id": "msk",
                "name": "MSK",
                "description": "Musculoskeletal system",
                "is_premium": True,
                "topics": [{"id": "MSK1", "name": "MSK 1", "file": "msk1.json"}],
            },
        ]
    }
    (root / "catalog.json").write_text(json.dumps(catalog), encoding="utf-8")

    focs2 = [
        make_candidate("Which term describes maximal drug effect?", ["A", "B", "C"], 1),
        make_candidate("Which route avoids first-pass metabolism?", ["Oral", "Sublingual"], 1),
        make_candidate("Antidote for paracetamol overdose?", ["Naloxone", "N-acetylcysteine"], 1),
    ]
    focs3 = [
        make_candidate("Rate-limiting enzyme of glycolysis?", ["Hexokinase", "PFK-1"], 1),
        make_candidate("Broken record", [], 0),
    ]
    (questions / "focs2.json").write_text(json.dumps(focs2), encoding="utf-8")
    (questions / "focs3.json").write_text(json.dumps(focs3), encoding="utf-8")
    return root
