"""Unit tests for CatalogSeeder and SeederManager."""

import json
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from mcqbank.core.content.loader import ContentLoader
from mcqbank.core.exceptions import UnknownPartitionError
from mcqbank.core.seeders import CatalogSeeder, Seeder, SeederManager
from mcqbank.core.seeders.partition import PartitionSeeder
from mcqbank.models.question import Question
from mcqbank.models.seed_run import SEED_RUN_FAILED, SEED_RUN_NO_CONTENT, SEED_RUN_SUCCEEDED, SeedRun
from mcqbank.schemas.catalog import PartitionKey
from mcqbank.schemas.seeding import SeedReport
from tests.helpers import add_question

FOCS2 = PartitionKey("focs", "FOCS2")
FOCS3 = PartitionKey("focs", "FOCS3")
MSK1 = PartitionKey("msk", "MSK1")


def _statuses(report: SeedReport) -> dict[PartitionKey, str]:
    return {outcome.key: outcome.status for outcome in report.outcomes}


class TestCatalogSeeder:
    """Test suite for CatalogSeeder."""

    def test_seeds_whole_catalog(self, db_session: Session, content_dir):
        """Test outcomes for populated, partly invalid and missing content."""
        report = CatalogSeeder(ContentLoader(content_dir)).run(db_session)

        assert _statuses(report) == {
            FOCS2: SEED_RUN_SUCCEEDED,
            FOCS3: SEED_RUN_SUCCEEDED,
            MSK1: SEED_RUN_NO_CONTENT,
        }
        assert report.success is True
        assert report.inserted == 4
        focs3 = next(outcome for outcome in report.outcomes if outcome.key == FOCS3)
        assert focs3.result.skipped_count == 1

    def test_missing_content_leaves_partition_untouched(self, db_session: Session, content_dir):
        """Test that a topic without a file is not wiped."""
        add_question(db_session, "msk", "MSK1", text="Hand-entered question")

        CatalogSeeder(ContentLoader(content_dir)).run(db_session)

        assert db_session.query(Question).filter(Question.topic == "MSK1").count() == 1

    def test_empty_content_leaves_partition_untouched(self, db_session: Session, content_dir):
        """Test that an empty array is reported as no content."""
        (content_dir / "questions" / "msk1.json").write_text("[]")
        add_question(db_session, "msk", "MSK1")
        loader = ContentLoader(content_dir)

        report = CatalogSeeder(loader, loader.resolve(["MSK1"])).run(db_session)

        assert _statuses(report) == {MSK1: SEED_RUN_NO_CONTENT}
        assert db_session.query(Question).filter(Question.topic == "MSK1").count() == 1

    def test_malformed_file_fails_only_its_partition(self, db_session: Session, content_dir):
        """Test that a broken file is a failure and the rest still runs."""
        (content_dir / "questions" / "focs2.json").write_text(json.dumps({"question": "Q?"}))

        report = CatalogSeeder(ContentLoader(content_dir)).run(db_session)

        assert report.success is False
        assert report.failed_partitions == [FOCS2]
        assert _statuses(report)[FOCS3] == SEED_RUN_SUCCEEDED

    def test_store_failure_fails_only_its_partition(self, db_session: Session, content_dir):
        """Test that a rolled-back reseed is recorded and the next partition proceeds."""
        original = PartitionSeeder.reseed_partition

        def reseed_or_fail(self, module_id, topic, candidates):
            if topic == "FOCS2":
                with patch.object(
                    self.repository,
                    "delete_options",
                    side_effect=OperationalError("DELETE", {}, Exception("connection lost")),
                ):
                    return original(self, module_id, topic, candidates)
            return original(self, module_id, topic, candidates)

        with patch.object(PartitionSeeder, "reseed_partition", reseed_or_fail):
            report = CatalogSeeder(ContentLoader(content_dir)).run(db_session)

        failed = next(outcome for outcome in report.outcomes if outcome.key == FOCS2)
        assert failed.status == SEED_RUN_FAILED
        assert "connection lost" in failed.error
        assert _statuses(report)[FOCS3] == SEED_RUN_SUCCEEDED

    def test_selected_entries_only(self, db_session: Session, content_dir):
        """Test reseeding a subset of the catalog."""
        loader = ContentLoader(content_dir)

        report = CatalogSeeder(loader, loader.resolve(["FOCS3"])).run(db_session)

        assert [outcome.key for outcome in report.outcomes] == [FOCS3]
        assert db_session.query(Question).filter(Question.topic == "FOCS2").count() == 0


class TestSeederManager:
    """Test suite for SeederManager."""

    def test_execute_records_seed_runs(self, db_session: Session, content_dir):
        """Test that every partition outcome is persisted."""
        result = SeederManager().execute(CatalogSeeder(ContentLoader(content_dir)), db_session)

        assert result["success"] is True
        assert result["executed"] == ["focs/FOCS2", "focs/FOCS3"]
        assert result["no_content"] == ["msk/MSK1"]
        assert result["failed"] == []
        assert result["inserted"] == 4

        runs = {(run.module_id, run.topic): run for run in db_session.query(SeedRun).all()}
        assert len(runs) == 3
        assert runs[("focs", "FOCS3")].inserted == 1
        assert runs[("focs", "FOCS3")].skipped == 1
        assert runs[("msk", "MSK1")].status == SEED_RUN_NO_CONTENT
        assert all(run.seeder_name == "CatalogSeeder" for run in runs.values())

    def test_execute_reports_failed_partitions(self, db_session: Session, content_dir):
        """Test the result of a partly failed run."""
        (content_dir / "questions" / "focs2.json").write_text("not json")

        result = SeederManager().execute(CatalogSeeder(ContentLoader(content_dir)), db_session)

        assert result["success"] is False
        assert result["failed"] == ["focs/FOCS2"]
        failed_run = db_session.query(SeedRun).filter(SeedRun.topic == "FOCS2").one()
        assert failed_run.status == SEED_RUN_FAILED
        assert "invalid JSON" in failed_run.error

    def test_execute_seeder_error(self, db_session: Session):
        """Test that a seeder raising a domain error is reported, not raised."""
        seeder = MagicMock(spec=Seeder)
        seeder.get_name.return_value = "BrokenSeeder"
        seeder.run.side_effect = UnknownPartitionError("cardio", ["focs/FOCS2"])

        result = SeederManager().execute(seeder, db_session)

        assert result["success"] is False
        assert result["failed"] == ["BrokenSeeder"]
        assert "cardio" in result["error"]
        assert db_session.query(SeedRun).count() == 0

    def test_history_newest_first(self, db_session: Session, content_dir):
        """Test listing recent runs."""
        loader = ContentLoader(content_dir)
        manager = SeederManager()
        manager.execute(CatalogSeeder(loader, loader.resolve(["FOCS2"])), db_session)
        manager.execute(CatalogSeeder(loader, loader.resolve(["FOCS3"])), db_session)

        runs = manager.history(db_session, limit=1)

        assert len(runs) == 1
        assert runs[0].topic == "FOCS3"
        assert len(manager.history(db_session)) == 2
