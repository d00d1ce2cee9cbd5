# quizapp/schemas/quiz.py
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StrictInt

from quizapp.schemas.question import Question, RedactedQuestion

TimerMinutes = Annotated[StrictInt, Field(gt=0)]


class QuizBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    subject: str | None = None
    description: str = ""
    timer: TimerMinutes


class QuizCreate(QuizBase):
    questions: list[Question] = []


class QuizUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    subject: str | None = None
    description: str | None = None
    timer: TimerMinutes | None = None
    questions: list[Question] | None = None


class QuizPublic(QuizBase):
    """Full quiz including answer keys; only ever returned to its owner."""
    id: int
    owner_id: str
    questions: list[Question]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class TakeQuizView(QuizBase):
    """What a test-taker receives before submitting."""
    id: int
    questions: list[RedactedQuestion]
