"""Seeder manager for executing and tracking seeders."""

import logging

from sqlalchemy.orm import Session

from mcqbank.core.exceptions import MCQBankError
from mcqbank.core.seeders.base import Seeder
from mcqbank.models.seed_run import SEED_RUN_FAILED, SEED_RUN_NO_CONTENT, SeedRun
from mcqbank.schemas.seeding import SeedReport

logger = logging.getLogger(__name__)


class SeederManager:
    """Run seeders and keep a history of what each run did."""

    def execute(self, seeder: Seeder, db: Session) -> dict:
        """Run a seeder and record one seed run per partition.

        Args:
            seeder: Seeder to run
            db: Database session

        Returns:
            Dictionary with execution results
        """
        seeder_name = seeder.get_name()
        try:
            report = seeder.run(db)
        except MCQBankError as e:
            db.rollback()
            return {
                "success": False,
                "error": e.message,
                "executed": [],
                "failed": [seeder_name],
            }

        self._record(db, seeder_name, report)

        return {
            "success": report.success,
            "executed": [
                str(outcome.key) for outcome in report.outcomes if outcome.result is not None
            ],
            "no_content": [
                str(outcome.key) for outcome in report.outcomes if outcome.status == SEED_RUN_NO_CONTENT
            ],
            "failed": [str(key) for key in report.failed_partitions],
            "inserted": report.inserted,
            "report": report,
        }

    def _record(self, db: Session, seeder_name: str, report: SeedReport) -> None:
        for outcome in report.outcomes:
            result = outcome.result
            db.add(
                SeedRun(
                    seeder_name=seeder_name,
                    module_id=outcome.key.module_id,
                    topic=outcome.key.topic,
                    status=outcome.status,
                    inserted=result.inserted if result else 0,
                    skipped=result.skipped_count if result else 0,
                    failed_records=result.failed if result else 0,
                    removed=result.removed_questions if result else 0,
                    error=outcome.error,
                )
            )
        db.commit()
        failed = sum(1 for outcome in report.outcomes if outcome.status == SEED_RUN_FAILED)
        logger.debug(f"Recorded {len(report.outcomes)} seed run(s), {failed} failed")

    def history(self, db: Session, limit: int = 20) -> list[SeedRun]:
        """Most recent seed runs first.

        Args:
            db: Database session
            limit: Maximum number of runs

        Returns:
            List of seed runs
        """
        return db.query(SeedRun).order_by(SeedRun.executed_at.desc()).limit(limit).all()
