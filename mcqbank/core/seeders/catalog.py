"""Seeder that reseeds catalog partitions from static content."""

import logging

from sqlalchemy.orm import Session

from mcqbank.core.content.loader import ContentLoader
from mcqbank.core.exceptions import ContentLoadError, PartitionReseedError
from mcqbank.core.seeders.base import Seeder
from mcqbank.core.seeders.partition import PartitionSeeder
from mcqbank.models.seed_run import SEED_RUN_FAILED, SEED_RUN_NO_CONTENT, SEED_RUN_SUCCEEDED
from mcqbank.schemas.catalog import CatalogEntry
from mcqbank.schemas.seeding import PartitionOutcome, SeedReport

logger = logging.getLogger(__name__)


class CatalogSeeder(Seeder):
    """Reseed the selected catalog partitions one after another.

    A partition whose content file is missing or empty is left untouched.
    A failed partition is reported and the next one still runs.
    """

    def __init__(
        self,
        loader: ContentLoader,
        entries: list[CatalogEntry] | None = None,
        batch_size: int | None = None,
    ):
        """Initialize seeder.

        Args:
            loader: Content source
            entries: Partitions to reseed. Defaults to the whole catalog
            batch_size: Records inserted per SAVEPOINT
        """
        self.loader = loader
        self.entries = entries
        self.batch_size = batch_size

    def run(self, db: Session) -> SeedReport:
        catalog = self.loader.catalog
        entries = self.entries if self.entries is not None else catalog.entries()
        seeder = PartitionSeeder(db, catalog=catalog, batch_size=self.batch_size)
        report = SeedReport()

        for entry in entries:
            report.outcomes.append(self._seed_entry(seeder, entry))

        logger.info(
            f"Seeded {len(entries)} partition(s): {report.inserted} question(s) inserted, "
            f"{len(report.failed_partitions)} partition(s) failed"
        )
        return report

    def _seed_entry(self, seeder: PartitionSeeder, entry: CatalogEntry) -> PartitionOutcome:
        if not self.loader.has_content(entry):
            logger.warning(f"No content file for {entry.key}, leaving partition untouched")
            return PartitionOutcome(key=entry.key, status=SEED_RUN_NO_CONTENT)

        try:
            candidates = self.loader.load_candidates(entry)
        except ContentLoadError as e:
            logger.error(e.message)
            return PartitionOutcome(key=entry.key, status=SEED_RUN_FAILED, error=e.message)

        if not candidates:
            logger.warning(f"No questions found for {entry.key}, leaving partition untouched")
            return PartitionOutcome(key=entry.key, status=SEED_RUN_NO_CONTENT)

        try:
            result = seeder.reseed_partition(entry.module_id, entry.topic, candidates)
        except PartitionReseedError as e:
            return PartitionOutcome(key=entry.key, status=SEED_RUN_FAILED, error=e.message)

        return PartitionOutcome(key=entry.key, status=SEED_RUN_SUCCEEDED, result=result)
