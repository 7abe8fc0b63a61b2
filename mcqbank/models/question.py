"""Question model for the MCQ bank."""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from mcqbank.core.db.session import Base


class Question(Base):
    """
    One multiple-choice question.

    Questions are grouped into partitions by (module_id, topic); the seeder
    replaces a whole partition at a time.
    """

    __tablename__ = "questions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    module_id = Column(String(50), nullable=False)  # "focs", "bcr"
    topic = Column(String(50), nullable=False)  # "FOCS2", "Anatomy"
    text = Column(Text, nullable=False)
    difficulty = Column(Integer, nullable=False, default=2)  # 1 easy, 2 medium, 3 hard
    slide_reference = Column(String(255), nullable=True)
    explanation = Column(Text, nullable=True)
    is_sample = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    options = relationship(
        "Option",
        back_populates="question",
        order_by="Option.position",
        passive_deletes=True,
    )

    __table_args__ = (Index("idx_questions_partition", "module_id", "topic"),)

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, module_id='{self.module_id}', topic='{self.topic}')>"
