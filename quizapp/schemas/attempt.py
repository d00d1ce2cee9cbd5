# quizapp/schemas/attempt.py
from datetime import datetime

from pydantic import BaseModel, StrictInt, StrictStr, model_serializer

Response = StrictInt | StrictStr


class AttemptAnswer(BaseModel):
    question_index: int
    answer: Response
    # Only set once an essay has been graded
    points: int | None = None

    @model_serializer(mode="wrap")
    def _omit_ungraded_points(self, handler):
        data = handler(self)
        if data.get("points") is None:
            data.pop("points", None)
        return data


class AttemptSubmit(BaseModel):
    quiz_id: int
    # Taken from the caller's identity when omitted
    student_id: str | None = None
    responses: list[Response]
    time_spent: int


class AttemptPublic(BaseModel):
    id: int
    quiz_id: int
    student_id: str
    answers: list[AttemptAnswer]
    time_spent: int
    score: int

    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class SubmitResult(BaseModel):
    message: str
    created: bool
    result: AttemptPublic


class AttemptSummary(BaseModel):
    """One row of the owner's per-quiz attempt list."""
    id: int
    student_id: str
    score: int
    time_spent: int
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
