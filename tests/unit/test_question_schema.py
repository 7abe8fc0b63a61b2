"""Unit tests for candidate question validation."""

import pytest
from pydantic import ValidationError

from mcqbank.schemas.question import CandidateQuestion, describe_validation_error
from tests.helpers import make_candidate


class TestCandidateQuestion:
    """Test suite for CandidateQuestion."""

    def test_valid_record_uses_content_field_names(self):
        """Test parsing a record with the camelCase keys of content files."""
        candidate = CandidateQuestion.model_validate(
            make_candidate(
                "Which muscle initiates abduction?",
                ["Deltoid", "Supraspinatus"],
                1,
                slideLink="MSK1_Lecture02.pdf",
                explanations=["Abducts from 15 degrees", "Initiates abduction"],
            )
        )

        assert candidate.question == "Which muscle initiates abduction?"
        assert candidate.correct_index == 1
        assert candidate.correct_option == "Supraspinatus"
        assert candidate.slide_link == "MSK1_Lecture02.pdf"
        assert candidate.difficulty is None

    def test_populate_by_name(self):
        """Test that snake_case names are accepted too."""
        candidate = CandidateQuestion(question="Q?", options=["A", "B"], correct_index=0)

        assert candidate.correct_option == "A"

    def test_extra_keys_ignored(self):
        """Test that unknown keys do not reject the record."""
        candidate = CandidateQuestion.model_validate(make_candidate(source="legacy", id=42))

        assert not hasattr(candidate, "source")

    def test_whitespace_is_stripped(self):
        """Test that surrounding whitespace is removed from texts."""
        candidate = CandidateQuestion.model_validate(make_candidate("  Q?  ", [" A ", "B"], 0))

        assert candidate.question == "Q?"
        assert candidate.options == ["A", "B"]

    @pytest.mark.parametrize(
        ("record", "reason"),
        [
            (make_candidate("   ", ["A"], 0), "question text is empty"),
            (make_candidate("Q?", [], 0), "options list is empty"),
            (make_candidate("Q?", ["A", " "], 0), "option 1 is empty"),
            (make_candidate("Q?", ["A", "B", "C"], 3), "correctIndex 3 is out of range for 3 options"),
            (make_candidate("Q?", ["A", "B"], -1), "correctIndex -1 is out of range for 2 options"),
        ],
    )
    def test_invalid_records(self, record, reason):
        """Test that malformed records are rejected with a clear reason."""
        with pytest.raises(ValidationError) as exc_info:
            CandidateQuestion.model_validate(record)

        assert reason in describe_validation_error(exc_info.value)

    def test_correct_index_is_not_coerced(self):
        """Test that string and boolean indexes are rejected."""
        with pytest.raises(ValidationError):
            CandidateQuestion.model_validate(make_candidate(correct_index="1"))
        with pytest.raises(ValidationError):
            CandidateQuestion.model_validate(make_candidate(correct_index=True))

    def test_missing_field_reason_names_the_field(self):
        """Test that missing keys are reported by name."""
        record = make_candidate()
        del record["correctIndex"]

        with pytest.raises(ValidationError) as exc_info:
            CandidateQuestion.model_validate(record)

        assert "correctIndex" in describe_validation_error(exc_info.value)

    def test_difficulty_range(self):
        """Test that difficulty must be between 1 and 3."""
        assert CandidateQuestion.model_validate(make_candidate(difficulty=3)).difficulty == 3
        with pytest.raises(ValidationError):
            CandidateQuestion.model_validate(make_candidate(difficulty=4))

    def test_option_explanation_is_lenient(self):
        """Test that short or missing explanation lists are tolerated."""
        candidate = CandidateQuestion.model_validate(
            make_candidate("Q?", ["A", "B", "C"], 0, explanations=["Because A", ""])
        )

        assert candidate.option_explanation(0) == "Because A"
        assert candidate.option_explanation(1) is None
        assert candidate.option_explanation(2) is None

        without = CandidateQuestion.model_validate(make_candidate())
        assert without.option_explanation(0) is None
