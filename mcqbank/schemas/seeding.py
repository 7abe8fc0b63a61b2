"""Result types returned by the seeders."""

from dataclasses import dataclass, field

from mcqbank.schemas.catalog import PartitionKey


@dataclass(frozen=True)
class SkippedRecord:
    """A candidate rejected by validation."""

    index: int
    reason: str


@dataclass
class ReseedResult:
    """Outcome of one partition reseed."""

    module_id: str
    topic: str
    inserted: int = 0
    skipped: list[SkippedRecord] = field(default_factory=list)
    failed: int = 0
    removed_questions: int = 0
    removed_options: int = 0
    removed_attempts: int = 0

    @property
    def key(self) -> PartitionKey:
        return PartitionKey(self.module_id, self.topic)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


@dataclass
class CleanupResult:
    """Outcome of a cleanup pass."""

    removed_questions: int = 0
    removed_options: int = 0
    removed_attempts: int = 0
    removed_by_partition: dict[PartitionKey, int] = field(default_factory=dict)


@dataclass
class PartitionOutcome:
    """What happened to one partition during a catalog run."""

    key: PartitionKey
    status: str
    result: ReseedResult | None = None
    error: str | None = None


@dataclass
class SeedReport:
    """Aggregated outcome of a seeder run."""

    outcomes: list[PartitionOutcome] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(outcome.error is None for outcome in self.outcomes)

    @property
    def inserted(self) -> int:
        return sum(outcome.result.inserted for outcome in self.outcomes if outcome.result)

    @property
    def failed_partitions(self) -> list[PartitionKey]:
        return [outcome.key for outcome in self.outcomes if outcome.error is not None]
