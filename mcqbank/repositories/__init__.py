"""Repositories for data access operations."""

from mcqbank.repositories.question_repository import QuestionRepository

__all__ = ["QuestionRepository"]
