"""Helper functions for tests."""

from typing import Any

from sqlalchemy.orm import Session

from mcqbank.models.attempt import Attempt
from mcqbank.models.option import Option
from mcqbank.models.question import Question


def make_candidate(
    question: str = "Which nerve supplies the deltoid?",
    options: list[str] | None = None,
    correct_index: int = 0,
    **extra: Any,
) -> dict[str, Any]:
    """
    Build a raw candidate record in the content file format.

    Args:
        question: Question text.
        options: Answer choices. Defaults to four anatomy answers.
        correct_index: 0-based index of the correct choice.
        **extra: Additional keys (slideLink, explanations, difficulty, ...).

    Returns:
        Dictionary shaped like one item of a topic file.
    """
    if options is None:
        options = ["Axillary nerve", "Radial nerve", "Ulnar nerve", "Median nerve"]
    record = {"question": question, "options": options, "correctIndex": correct_index}
    record.update(extra)
    return record


def add_question(
    db_session: Session,
    module_id: str,
    topic: str,
    text: str = "Existing question",
    options: tuple[str, ...] = ("Yes", "No"),
    is_sample: bool = False,
) -> Question:
    """Insert a question with options directly, bypassing the seeder."""
    question = Question(module_id=module_id, topic=topic, text=text, difficulty=2, is_sample=is_sample)
    question.options = [
        Option(text=option, position=position, is_correct=position == 0)
        for position, option in enumerate(options)
    ]
    db_session.add(question)
    db_session.commit()
    return question


def add_attempts(db_session: Session, question: Question, user_id: str = "user-1") -> list[Attempt]:
    """Record one attempt per option of ``question``, plus one without a selected option."""
    attempts = [
        Attempt(
            question_id=question.id,
            selected_option_id=option.id,
            user_id=user_id,
            is_correct=option.is_correct,
        )
        for option in question.options
    ]
    attempts.append(Attempt(question_id=question.id, user_id=user_id, is_correct=False))
    db_session.add_all(attempts)
    db_session.commit()
    return attempts


def partition_snapshot(db_session: Session, module_id: str, topic: str) -> list[tuple]:
    """Content of a partition, independent of generated ids."""
    questions = (
        db_session.query(Question)
        .filter(Question.module_id == module_id, Question.topic == topic)
        .order_by(Question.text)
        .all()
    )
    return [
        (
            question.text,
            question.difficulty,
            tuple((option.position, option.text, option.is_correct) for option in question.options),
        )
        for question in questions
    ]
