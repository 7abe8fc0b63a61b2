"""Pydantic schemas and result types."""

from mcqbank.schemas.catalog import Catalog, CatalogEntry, ModuleEntry, PartitionKey, TopicEntry
from mcqbank.schemas.question import CandidateQuestion, describe_validation_error
from mcqbank.schemas.seeding import (
    CleanupResult,
    PartitionOutcome,
    ReseedResult,
    SeedReport,
    SkippedRecord,
)

__all__ = [
    "CandidateQuestion",
    "Catalog",
    "CatalogEntry",
    "CleanupResult",
    "ModuleEntry",
    "PartitionKey",
    "PartitionOutcome",
    "ReseedResult",
    "SeedReport",
    "SkippedRecord",
    "TopicEntry",
    "describe_validation_error",
]
