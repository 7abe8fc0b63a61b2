"""Logging configuration for seeding and cleanup events."""

import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from mcqbank.core.config_file import get_settings

HUMAN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Logger for application events
app_logger = logging.getLogger("mcqbank")

# Logger for data-changing events (reseeds, cleanups)
seed_logger = logging.getLogger("mcqbank.seed")


def json_formatter() -> JsonFormatter:
    """Formatter emitting one JSON object per record."""
    return JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        rename_fields={"asctime": "timestamp", "name": "logger", "levelname": "level"},
    )


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Attach a stdout handler to the ``mcqbank`` logger.

    Args:
        level: Log level name. Defaults to ``LOG_LEVEL``.
        fmt: ``"human"`` or ``"json"``. Defaults to ``LOG_FORMAT``.
    """
    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()
    fmt = fmt or settings.LOG_FORMAT

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if fmt == "json":
        handler.setFormatter(json_formatter())
    else:
        handler.setFormatter(logging.Formatter(HUMAN_FORMAT, datefmt=DATE_FORMAT))

    app_logger.setLevel(level)
    # Replace rather than stack handlers when called more than once
    for existing in list(app_logger.handlers):
        app_logger.removeHandler(existing)
    app_logger.addHandler(handler)


def _preview(text: str, length: int = 30) -> str:
    """Shorten question text for log lines."""
    text = " ".join(str(text).split())
    if len(text) <= length:
        return text
    return text[:length] + "..."


def log_partition_cleared(
    module_id: str, topic: str, questions: int, options: int, attempts: int
) -> None:
    """
    Log removal of a partition's existing rows.

    Args:
        module_id: Module key.
        topic: Topic key.
        questions: Questions deleted.
        options: Options deleted.
        attempts: Attempts deleted.
    """
    seed_logger.info(
        f"Partition cleared - module_id={module_id}, topic={topic}, "
        f"questions={questions}, options={options}, attempts={attempts}"
    )


def log_record_skipped(module_id: str, topic: str, index: int, reason: str) -> None:
    """
    Log a candidate record rejected by validation.

    Args:
        module_id: Module key.
        topic: Topic key.
        index: Position of the record in the source list.
        reason: Validation message.
    """
    seed_logger.warning(
        f"Invalid question data, skipping - module_id={module_id}, topic={topic}, "
        f"index={index}, reason={reason}"
    )


def log_record_failed(module_id: str, topic: str, index: int, text: str, error: Exception) -> None:
    """Log a record whose insert failed in the store."""
    seed_logger.error(
        f"Error importing question - module_id={module_id}, topic={topic}, "
        f"index={index}, question=\"{_preview(text)}\", error={error}"
    )


def log_partition_reseeded(
    module_id: str, topic: str, inserted: int, skipped: int, failed: int
) -> None:
    """
    Log a completed partition reseed.

    Args:
        module_id: Module key.
        topic: Topic key.
        inserted: Questions inserted.
        skipped: Records rejected by validation.
        failed: Records whose insert failed.
    """
    seed_logger.info(
        f"Partition reseeded - module_id={module_id}, topic={topic}, "
        f"inserted={inserted}, skipped={skipped}, failed={failed}"
    )


def log_cleanup(removed: int, details: dict[str, Any] | None = None) -> None:
    """Log a cleanup pass."""
    message = f"Cleanup complete - removed_questions={removed}"
    if details:
        message += f", details={details}"
    seed_logger.info(message)
