"""Attempt model.

Attempts are written by the quiz application. They are modelled here so the
seeder can remove them before the options and questions they reference.
"""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Uuid

from mcqbank.core.db.session import Base


class Attempt(Base):
    """A user's answer to a question."""

    __tablename__ = "attempts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    question_id = Column(Uuid(as_uuid=True), ForeignKey("questions.id"), nullable=True, index=True)
    selected_option_id = Column(
        Uuid(as_uuid=True), ForeignKey("options.id"), nullable=True, index=True
    )
    user_id = Column(String(255), nullable=True)
    is_correct = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Attempt(id={self.id}, question_id={self.question_id})>"
