"""Question repository for data access operations.

The repository never commits: the seeder owns the transaction boundary so a
whole partition is replaced or left untouched.
"""

from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from mcqbank.models.attempt import Attempt
from mcqbank.models.option import Option
from mcqbank.models.question import Question
from mcqbank.schemas.catalog import PartitionKey
from mcqbank.schemas.question import CandidateQuestion

QuestionIds = Select | Sequence[UUID]


class QuestionRepository:
    """Repository for question, option and attempt data access."""

    def __init__(self, db: Session):
        """Initialize repository with database session."""
        self.db = db

    # Selection
    def partition_question_ids(self, module_id: str, topic: str) -> Select:
        """Subquery selecting the ids of one partition's questions."""
        return select(Question.id).where(Question.module_id == module_id, Question.topic == topic)

    def _option_ids(self, question_ids: QuestionIds) -> Select:
        return select(Option.id).where(Option.question_id.in_(question_ids))

    # Cascade deletes, in the order they must run
    def delete_attempts_by_option(self, question_ids: QuestionIds) -> int:
        """Delete attempts whose selected option belongs to the given questions."""
        return (
            self.db.query(Attempt)
            .filter(Attempt.selected_option_id.in_(self._option_ids(question_ids)))
            .delete(synchronize_session=False)
        )

    def delete_attempts_by_question(self, question_ids: QuestionIds) -> int:
        """Delete attempts referencing the given questions directly."""
        return (
            self.db.query(Attempt)
            .filter(Attempt.question_id.in_(question_ids))
            .delete(synchronize_session=False)
        )

    def delete_options(self, question_ids: QuestionIds) -> int:
        """Delete the options of the given questions."""
        return (
            self.db.query(Option)
            .filter(Option.question_id.in_(question_ids))
            .delete(synchronize_session=False)
        )

    def delete_partition_questions(self, module_id: str, topic: str) -> int:
        """Delete all questions of a partition."""
        return (
            self.db.query(Question)
            .filter(Question.module_id == module_id, Question.topic == topic)
            .delete(synchronize_session=False)
        )

    def delete_questions(self, question_ids: Sequence[UUID]) -> int:
        """Delete questions by id."""
        if not question_ids:
            return 0
        return (
            self.db.query(Question)
            .filter(Question.id.in_(question_ids))
            .delete(synchronize_session=False)
        )

    # Inserts
    def add_question(
        self,
        module_id: str,
        topic: str,
        candidate: CandidateQuestion,
        default_difficulty: int = 2,
    ) -> Question:
        """Add one question with its options to the session (not flushed)."""
        correct_explanation = candidate.option_explanation(candidate.correct_index)
        question = Question(
            module_id=module_id,
            topic=topic,
            text=candidate.question,
            difficulty=candidate.difficulty or default_difficulty,
            slide_reference=candidate.slide_link or None,
            explanation=correct_explanation,
            is_sample=False,
        )
        question.options = [
            Option(
                text=text,
                position=position,
                is_correct=position == candidate.correct_index,
                explanation=candidate.option_explanation(position),
            )
            for position, text in enumerate(candidate.options)
        ]
        self.db.add(question)
        return question

    # Reads
    def get_partition_questions(self, module_id: str, topic: str) -> list[Question]:
        """Get all questions of a partition."""
        return (
            self.db.query(Question)
            .filter(Question.module_id == module_id, Question.topic == topic)
            .order_by(Question.created_at, Question.text)
            .all()
        )

    def count_partition(self, module_id: str, topic: str) -> int:
        return (
            self.db.query(func.count(Question.id))
            .filter(Question.module_id == module_id, Question.topic == topic)
            .scalar()
        )

    def partition_counts(self) -> dict[PartitionKey, int]:
        """Question count per (module_id, topic)."""
        rows = (
            self.db.query(Question.module_id, Question.topic, func.count(Question.id))
            .group_by(Question.module_id, Question.topic)
            .order_by(Question.module_id, Question.topic)
            .all()
        )
        return {PartitionKey(module_id, topic): count for module_id, topic, count in rows}

    def find_questions_to_clean(
        self, valid_keys: Iterable[PartitionKey]
    ) -> list[tuple[UUID, PartitionKey]]:
        """Questions outside ``valid_keys`` or flagged as samples."""
        valid = {PartitionKey(*key) for key in valid_keys}
        rows = self.db.query(Question.id, Question.module_id, Question.topic, Question.is_sample).all()
        return [
            (question_id, PartitionKey(module_id, topic))
            for question_id, module_id, topic, is_sample in rows
            if is_sample or PartitionKey(module_id, topic) not in valid
        ]

    # Flags
    def flag_samples(self, markers: Iterable[str]) -> int:
        """Mark questions whose text contains any marker as samples."""
        flagged = 0
        for marker in markers:
            marker = marker.strip().lower()
            if not marker:
                continue
            flagged += (
                self.db.query(Question)
                .filter(
                    Question.is_sample.is_(False),
                    func.lower(Question.text).contains(marker, autoescape=True),
                )
                .update({Question.is_sample: True}, synchronize_session=False)
            )
        return flagged
