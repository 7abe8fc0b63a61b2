"""SQLAlchemy models."""

from mcqbank.models.attempt import Attempt
from mcqbank.models.option import Option
from mcqbank.models.question import Question
from mcqbank.models.seed_run import SeedRun

__all__ = ["Attempt", "Option", "Question", "SeedRun"]
