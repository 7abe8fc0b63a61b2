"""Model for seed run tracking."""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime, Integer, String, Text, Uuid

from mcqbank.core.db.session import Base

SEED_RUN_SUCCEEDED = "succeeded"
SEED_RUN_FAILED = "failed"
SEED_RUN_NO_CONTENT = "no_content"


class SeedRun(Base):
    """One recorded reseed of a partition."""

    __tablename__ = "seed_runs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    seeder_name = Column(String(255), nullable=False)
    module_id = Column(String(50), nullable=False, index=True)
    topic = Column(String(50), nullable=False, index=True)
    status = Column(String(20), nullable=False)
    inserted = Column(Integer, nullable=False, default=0)
    skipped = Column(Integer, nullable=False, default=0)
    failed_records = Column(Integer, nullable=False, default=0)
    removed = Column(Integer, nullable=False, default=0)
    error = Column(Text, nullable=True)
    executed_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SeedRun(module_id={self.module_id}, topic={self.topic}, status={self.status})>"
