"""Static question content: catalog.json plus one JSON array per topic."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mcqbank.core.config_file import get_settings
from mcqbank.core.exceptions import CatalogError, ContentLoadError, UnknownPartitionError
from mcqbank.schemas.catalog import Catalog, CatalogEntry

logger = logging.getLogger(__name__)

CATALOG_FILE = "catalog.json"
QUESTIONS_DIR = "questions"


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ContentLoadError(str(path), "file not found") from e
    except json.JSONDecodeError as e:
        raise ContentLoadError(str(path), f"invalid JSON at line {e.lineno}: {e.msg}") from e
    except OSError as e:
        raise ContentLoadError(str(path), str(e)) from e


def load_catalog(content_dir: Path) -> Catalog:
    """Load and validate ``catalog.json``.

    Raises:
        CatalogError: File missing, unreadable or not a valid catalog
    """
    path = content_dir / CATALOG_FILE
    try:
        data = _read_json(path)
    except ContentLoadError as e:
        raise CatalogError(e.message, details=e.details) from e

    try:
        return Catalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(
            f"Invalid catalog {path}",
            details={"errors": [error["msg"] for error in e.errors()]},
        ) from e


def load_topic_candidates(path: Path) -> list[dict[str, Any]]:
    """Load the raw records of one topic file.

    Records are returned unvalidated so a single bad record can be skipped
    by the seeder instead of failing the whole file.

    Raises:
        ContentLoadError: Missing file, invalid JSON, or not an array of objects
    """
    data = _read_json(path)
    if not isinstance(data, list):
        raise ContentLoadError(str(path), f"expected a JSON array, got {type(data).__name__}")
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise ContentLoadError(
                str(path), f"item {index} is {type(record).__name__}, expected an object"
            )
    return data


class ContentLoader:
    """Source of catalog entries and candidate records for seeding."""

    def __init__(self, content_dir: Path | None = None):
        """Initialize loader.

        Args:
            content_dir: Directory holding catalog.json and questions/.
                Defaults to the configured ``CONTENT_DIR``.
        """
        self.content_dir = Path(content_dir) if content_dir else get_settings().content_dir
        self._catalog: Catalog | None = None

    @property
    def catalog(self) -> Catalog:
        if self._catalog is None:
            self._catalog = load_catalog(self.content_dir)
        return self._catalog

    def topic_path(self, entry: CatalogEntry) -> Path:
        return self.content_dir / QUESTIONS_DIR / entry.file

    def has_content(self, entry: CatalogEntry) -> bool:
        return self.topic_path(entry).is_file()

    def load_candidates(self, entry: CatalogEntry) -> list[dict[str, Any]]:
        """Raw records for one catalog entry."""
        path = self.topic_path(entry)
        candidates = load_topic_candidates(path)
        logger.debug(f"Loaded {len(candidates)} records for {entry.key} from {path}")
        return candidates

    def resolve(self, selectors: Iterable[str] | None = None) -> list[CatalogEntry]:
        """Catalog entries for the given topic or module selectors.

        No selectors means every partition. Duplicates are dropped and
        catalog order is kept.

        Raises:
            UnknownPartitionError: A selector matches no topic or module
        """
        selectors = [selector for selector in (selectors or []) if selector.strip()]
        if not selectors:
            return self.catalog.entries()

        wanted = set()
        for selector in selectors:
            matches = self.catalog.resolve(selector)
            if not matches:
                raise UnknownPartitionError(selector, self.catalog.available())
            wanted.update(entry.key for entry in matches)

        return [entry for entry in self.catalog.entries() if entry.key in wanted]
