"""Answer option model."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from mcqbank.core.db.session import Base


class Option(Base):
    """Answer choice owned by exactly one question."""

    __tablename__ = "options"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    # No ON DELETE CASCADE: the seeder removes options explicitly
    question_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("questions.id"),
        nullable=False,
        index=True,
    )
    text = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0)  # 0 = A, 1 = B, ...
    explanation = Column(Text, nullable=True)

    question = relationship("Question", back_populates="options")

    def __repr__(self) -> str:
        return f"<Option(id={self.id}, position={self.position}, is_correct={self.is_correct})>"
