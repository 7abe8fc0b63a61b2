"""Idempotent replacement of one (module, topic) partition."""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mcqbank.core.config_file import get_settings
from mcqbank.core.exceptions import CleanupError, PartitionReseedError, UnknownPartitionError
from mcqbank.core.logging import (
    log_cleanup,
    log_partition_cleared,
    log_partition_reseeded,
    log_record_failed,
    log_record_skipped,
)
from mcqbank.repositories.question_repository import QuestionRepository
from mcqbank.schemas.catalog import Catalog, PartitionKey
from mcqbank.schemas.question import CandidateQuestion, describe_validation_error
from mcqbank.schemas.seeding import CleanupResult, ReseedResult, SkippedRecord

logger = logging.getLogger(__name__)

# Keeps IN (...) lists under SQLite's bound-parameter limit
CLEANUP_CHUNK_SIZE = 500


def validate_candidates(
    candidates: Sequence[Any],
) -> tuple[list[tuple[int, CandidateQuestion]], list[SkippedRecord]]:
    """Split raw records into valid candidates and skipped records.

    Returns:
        (index, candidate) pairs in input order, and the skipped records
    """
    valid: list[tuple[int, CandidateQuestion]] = []
    skipped: list[SkippedRecord] = []
    for index, raw in enumerate(candidates):
        if isinstance(raw, CandidateQuestion):
            valid.append((index, raw))
            continue
        try:
            valid.append((index, CandidateQuestion.model_validate(raw)))
        except ValidationError as exc:
            skipped.append(SkippedRecord(index=index, reason=describe_validation_error(exc)))
    return valid, skipped


class PartitionSeeder:
    """Replace a partition's questions with a candidate list, atomically.

    The caller owns the session and must not reseed the same partition from
    two places at once.
    """

    def __init__(
        self,
        db: Session,
        catalog: Catalog | None = None,
        batch_size: int | None = None,
        default_difficulty: int | None = None,
    ):
        """Initialize seeder.

        Args:
            db: Database session
            catalog: When given, partitions outside it are rejected
            batch_size: Records inserted per SAVEPOINT. Defaults to ``SEED_BATCH_SIZE``
            default_difficulty: Difficulty for records without one

        Raises:
            ValueError: ``batch_size`` is less than 1
        """
        settings = get_settings()
        if batch_size is None:
            batch_size = settings.SEED_BATCH_SIZE
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.db = db
        self.catalog = catalog
        self.batch_size = batch_size
        self.default_difficulty = default_difficulty or settings.SEED_DEFAULT_DIFFICULTY
        self.repository = QuestionRepository(db)

    def reseed_partition(self, module_id: str, topic: str, candidates: Sequence[Any]) -> ReseedResult:
        """Make the partition contain exactly the valid candidates.

        Args:
            module_id: Module key (e.g. "focs")
            topic: Topic key (e.g. "FOCS2")
            candidates: Raw records or ``CandidateQuestion`` objects, in order

        Returns:
            Counts of inserted, skipped and failed records and removed rows

        Raises:
            UnknownPartitionError: Partition not in the catalog (nothing touched)
            PartitionReseedError: Transaction failed; the previous state is kept
        """
        if self.catalog is not None and not self.catalog.contains(module_id, topic):
            raise UnknownPartitionError(str(PartitionKey(module_id, topic)), self.catalog.available())

        result = ReseedResult(module_id=module_id, topic=topic)
        valid, result.skipped = validate_candidates(candidates)
        for record in result.skipped:
            log_record_skipped(module_id, topic, record.index, record.reason)

        logger.info(f"Importing {len(valid)} questions for {module_id} ({topic})...")

        try:
            self._clear_partition(result)
            self._insert_candidates(result, valid)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Reseed of {module_id}/{topic} rolled back: {e}")
            raise PartitionReseedError(module_id, topic, str(e)) from e

        log_partition_reseeded(module_id, topic, result.inserted, result.skipped_count, result.failed)
        return result

    def _clear_partition(self, result: ReseedResult) -> None:
        """Delete attempts, options and questions of the partition, in that order."""
        question_ids = self.repository.partition_question_ids(result.module_id, result.topic)
        result.removed_attempts = self.repository.delete_attempts_by_option(question_ids)
        result.removed_attempts += self.repository.delete_attempts_by_question(question_ids)
        result.removed_options = self.repository.delete_options(question_ids)
        result.removed_questions = self.repository.delete_partition_questions(
            result.module_id, result.topic
        )
        log_partition_cleared(
            result.module_id,
            result.topic,
            result.removed_questions,
            result.removed_options,
            result.removed_attempts,
        )

    def _insert_candidates(
        self, result: ReseedResult, valid: list[tuple[int, CandidateQuestion]]
    ) -> None:
        """Insert candidates batch by batch.

        Each batch runs in a SAVEPOINT. If a batch fails, its records are
        retried one SAVEPOINT each so only the offending record is lost.
        """
        for start in range(0, len(valid), self.batch_size):
            batch = valid[start : start + self.batch_size]
            try:
                with self.db.begin_nested():
                    for _, candidate in batch:
                        self._add(result, candidate)
                result.inserted += len(batch)
            except SQLAlchemyError:
                for index, candidate in batch:
                    self._insert_one(result, index, candidate)

            logger.debug(f"Imported {result.inserted}/{len(valid)} questions...")

    def _insert_one(self, result: ReseedResult, index: int, candidate: CandidateQuestion) -> None:
        try:
            with self.db.begin_nested():
                self._add(result, candidate)
            result.inserted += 1
        except SQLAlchemyError as e:
            result.failed += 1
            log_record_failed(result.module_id, result.topic, index, candidate.question, e)

    def _add(self, result: ReseedResult, candidate: CandidateQuestion) -> None:
        self.repository.add_question(
            result.module_id, result.topic, candidate, default_difficulty=self.default_difficulty
        )

    def cleanup_invalid_partitions(self, valid_keys: Iterable[PartitionKey | tuple[str, str]]) -> CleanupResult:
        """Remove questions outside ``valid_keys`` and questions flagged as samples.

        Questions in a valid partition are only removed when ``is_sample`` is
        set; their text is never inspected here.

        Raises:
            CleanupError: Transaction failed; nothing was removed
        """
        result = CleanupResult()
        try:
            targets = self.repository.find_questions_to_clean(valid_keys)
            if not targets:
                logger.info("No invalid or sample questions found. Database is clean.")
                return result

            logger.info(f"Found {len(targets)} invalid/sample questions to remove")
            for _, key in targets:
                result.removed_by_partition[key] = result.removed_by_partition.get(key, 0) + 1

            ids = [question_id for question_id, _ in targets]
            for start in range(0, len(ids), CLEANUP_CHUNK_SIZE):
                chunk = ids[start : start + CLEANUP_CHUNK_SIZE]
                result.removed_attempts += self.repository.delete_attempts_by_option(chunk)
                result.removed_attempts += self.repository.delete_attempts_by_question(chunk)
                result.removed_options += self.repository.delete_options(chunk)
                result.removed_questions += self.repository.delete_questions(chunk)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise CleanupError(str(e)) from e

        log_cleanup(
            result.removed_questions,
            {str(key): count for key, count in result.removed_by_partition.items()},
        )
        return result

    def flag_sample_questions(self, markers: Iterable[str] | None = None) -> int:
        """Flag questions whose text contains a sample marker.

        Args:
            markers: Case-insensitive substrings. Defaults to ``SAMPLE_MARKERS``

        Returns:
            Number of questions newly flagged
        """
        if markers is None:
            markers = get_settings().SAMPLE_MARKERS
        try:
            flagged = self.repository.flag_samples(markers)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise CleanupError(str(e)) from e
        logger.info(f"Flagged {flagged} sample question(s)")
        return flagged

    def partition_counts(self) -> dict[PartitionKey, int]:
        """Question count per partition."""
        return self.repository.partition_counts()
