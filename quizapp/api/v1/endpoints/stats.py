# quizapp/api/v1/endpoints/stats.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizapp.core.security import Identity, get_current_teacher
from quizapp.db.session import get_db
from quizapp.schemas.score import Dashboard, QuizSummary
from quizapp.services import quiz_service, stats_service

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/dashboard", response_model=Dashboard)
def get_dashboard(
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    return stats_service.dashboard(db, owner=current_teacher)


@router.get("/quizzes/{quiz_id}", response_model=QuizSummary)
def get_quiz_summary(
    quiz_id: int,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    quiz = quiz_service.get_owned_quiz(db, quiz_id, current_teacher)
    return stats_service.quiz_summary(db, quiz=quiz)
