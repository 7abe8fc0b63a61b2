"""Schemas for candidate question records."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, model_validator


class CandidateQuestion(BaseModel):
    """A source-provided question payload.

    Field names follow the content files (``correctIndex``, ``slideLink``);
    Python code uses the snake_case attributes.
    """

    question: StrictStr = Field(..., description="Question text")
    options: list[StrictStr] = Field(..., description="Answer choices in display order (A, B, C, ...)")
    correct_index: StrictInt = Field(..., alias="correctIndex", description="0-based index of the correct option")
    slide_link: StrictStr | None = Field(None, alias="slideLink", description="Lecture slide reference")
    explanations: list[StrictStr] | None = Field(None, description="Per-option explanations")
    difficulty: StrictInt | None = Field(None, ge=1, le=3, description="1 easy, 2 medium, 3 hard")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    @model_validator(mode="after")
    def _check_answer_choices(self) -> "CandidateQuestion":
        if not self.question:
            raise ValueError("question text is empty")
        if not self.options:
            raise ValueError("options list is empty")
        for position, option in enumerate(self.options):
            if not option:
                raise ValueError(f"option {position} is empty")
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError(
                f"correctIndex {self.correct_index} is out of range for {len(self.options)} options"
            )
        return self

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_index]

    def option_explanation(self, position: int) -> str | None:
        """Explanation for one option, if the source supplied it."""
        if not self.explanations or position >= len(self.explanations):
            return None
        return self.explanations[position] or None


def describe_validation_error(exc: ValidationError) -> str:
    """Condense a pydantic error into one line for skip reports."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "invalid")
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)
