"""Fixtures for CLI tests: environment pointing at a temporary database."""

import pytest
from typer.testing import CliRunner

from mcqbank.core.config_file import get_settings
from mcqbank.core.db.session import Base, create_db_engine, create_session_factory, get_engine


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_env(tmp_path, content_dir, monkeypatch):
    """Point DATABASE_URL and CONTENT_DIR at temporary locations."""
    database_url = f"sqlite:///{tmp_path / 'cli.db'}"
    # Wide console so rich does not wrap asserted lines
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("CONTENT_DIR", str(content_dir))
    get_settings.cache_clear()
    get_engine.cache_clear()
    return database_url


@pytest.fixture
def cli_db(cli_env):
    """Initialized database for CLI commands, plus a session factory to inspect it."""
    engine = create_db_engine(cli_env)
    Base.metadata.create_all(bind=engine)
    yield create_session_factory(engine)
    engine.dispose()
