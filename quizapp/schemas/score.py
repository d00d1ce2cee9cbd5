# quizapp/schemas/score.py
from datetime import datetime

from pydantic import BaseModel, StrictInt


class GradeCreate(BaseModel):
    """Teacher assigns points to one essay answer."""
    quiz_id: int
    student_id: str
    question_index: StrictInt
    points: StrictInt


class PendingEssay(BaseModel):
    attempt_id: int
    quiz_id: int
    student_id: str
    question_index: int
    max_points: int


class QuizSummary(BaseModel):
    quiz_id: int
    name: str
    submissions: int
    average_score: float | None = None
    min_score: int | None = None
    max_score: int | None = None
    max_possible_score: int


class QuizAverage(BaseModel):
    quiz_id: int
    quiz_name: str
    submissions: int
    average_score: float


class RecentAttempt(BaseModel):
    attempt_id: int
    quiz_id: int
    quiz_name: str
    student_id: str
    score: int
    created_at: datetime | None = None


class Dashboard(BaseModel):
    total_quizzes: int
    total_attempts: int
    average_scores: list[QuizAverage]
    recent_attempts: list[RecentAttempt] = []
