"""Quiz payload schema.

Field names are camelCase because the payload is stored verbatim in the
``course_contents.content`` column and read back by browser clients.
"""
import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from academy.config import DEFAULT_PASSING_SCORE

# One blank per bracket pair: "The capital of France is [ ]."
BLANK_PATTERN = re.compile(r"\[[^\[\]]*\]")


def count_blanks(text: str) -> int:
    """Count bracket-delimited blanks in a fill-in text."""
    return len(BLANK_PATTERN.findall(text))


class _QuestionBase(BaseModel):
    """Fields shared by every question variant."""

    id: str = Field(..., min_length=1)
    question: str
    explanation: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        # Older editors stored numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class SingleAnswerQuestion(_QuestionBase):
    """Single choice or true/false: exactly one correct option."""

    type: Literal["SINGLE_CHOICE", "TRUE_FALSE"]
    options: list[str] = Field(..., min_length=2)
    correctAnswers: list[int] = Field(..., min_length=1, max_length=1)

    @model_validator(mode="after")
    def check_indices(self) -> "SingleAnswerQuestion":
        index = self.correctAnswers[0]
        if not 0 <= index < len(self.options):
            raise ValueError(f"correct answer {index} is not an option index")
        return self

    @property
    def correct_index(self) -> int:
        return self.correctAnswers[0]


class MultipleChoiceQuestion(_QuestionBase):
    """One or more correct options."""

    type: Literal["MULTIPLE_CHOICE"]
    options: list[str] = Field(..., min_length=2)
    correctAnswers: list[int] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_indices(self) -> "MultipleChoiceQuestion":
        if len(set(self.correctAnswers)) != len(self.correctAnswers):
            raise ValueError("correct answers must be unique")
        for index in self.correctAnswers:
            if not 0 <= index < len(self.options):
                raise ValueError(f"correct answer {index} is not an option index")
        return self


class TextInputQuestion(_QuestionBase):
    """Free text compared against a single expected answer."""

    type: Literal["TEXT_INPUT"]
    correctAnswer: str
    caseSensitive: bool = False


class MatchingPair(BaseModel):
    left: str
    right: str


class MatchingQuestion(_QuestionBase):
    """Each left item must be matched with its right counterpart."""

    type: Literal["MATCHING"]
    pairs: list[MatchingPair] = Field(..., min_length=1)


class FillBlanksQuestion(_QuestionBase):
    """Text with bracket-delimited blanks, one expected answer per blank."""

    type: Literal["FILL_BLANKS"]
    text: str
    answers: list[str] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_blanks(self) -> "FillBlanksQuestion":
        blanks = count_blanks(self.text)
        if blanks != len(self.answers):
            raise ValueError(
                f"text has {blanks} blanks but {len(self.answers)} answers were given"
            )
        return self


QuizQuestion = Annotated[
    Union[
        SingleAnswerQuestion,
        MultipleChoiceQuestion,
        TextInputQuestion,
        MatchingQuestion,
        FillBlanksQuestion,
    ],
    Field(discriminator="type"),
]


class QuizPayload(BaseModel):
    """Content of a QUIZ node."""

    questions: list[QuizQuestion]
    shuffleQuestions: bool = False
    passingScore: int = Field(DEFAULT_PASSING_SCORE, ge=0, le=100)
