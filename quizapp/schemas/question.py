# quizapp/schemas/question.py
"""Question variants.

A question is one of three closed variants selected by ``type``. Each variant
validates its own ``options`` / ``correct_answer`` shape when the quiz is
written, so stored questions never need to be re-checked.
"""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator, model_validator

MULTIPLE_CHOICE = "multiple-choice"
TRUE_FALSE = "true-false"
ESSAY = "essay"

OBJECTIVE_TYPES = (MULTIPLE_CHOICE, TRUE_FALSE)
TRUE_FALSE_OPTIONS = ["True", "False"]

QuestionText = Annotated[StrictStr, Field(min_length=1)]
Points = Annotated[StrictInt, Field(gt=0)]


class MultipleChoiceQuestion(BaseModel):
    type: Literal["multiple-choice"]
    question: QuestionText
    points: Points
    options: list[StrictStr] = Field(min_length=2)
    correct_answer: StrictInt

    @model_validator(mode="after")
    def _answer_is_option_index(self):
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError(
                f"correct_answer must index into options (0..{len(self.options) - 1})"
            )
        return self


class TrueFalseQuestion(BaseModel):
    type: Literal["true-false"]
    question: QuestionText
    points: Points
    options: list[str] = Field(default_factory=lambda: list(TRUE_FALSE_OPTIONS))
    correct_answer: StrictInt = 0

    @field_validator("options", mode="before")
    @classmethod
    def _fixed_options(cls, _value):
        return list(TRUE_FALSE_OPTIONS)

    @field_validator("correct_answer")
    @classmethod
    def _zero_or_one(cls, value: int) -> int:
        if value not in (0, 1):
            raise ValueError("true-false correct_answer must be 0 (True) or 1 (False)")
        return value


class EssayQuestion(BaseModel):
    type: Literal["essay"]
    question: QuestionText
    points: Points
    options: list[str] = Field(default_factory=list)
    # Empty string marks the question as not auto-gradable
    correct_answer: Literal[""] = ""

    @field_validator("options", mode="before")
    @classmethod
    def _no_options(cls, _value):
        return []


Question = Annotated[
    Union[MultipleChoiceQuestion, TrueFalseQuestion, EssayQuestion],
    Field(discriminator="type"),
]


class RedactedQuestion(BaseModel):
    """Take-safe question: there is deliberately no correct_answer field."""
    type: Literal["multiple-choice", "true-false", "essay"]
    question: str
    points: int
    options: list[str]
