# quizapp/api/v1/endpoints/grades.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizapp.core.security import Identity, get_current_teacher
from quizapp.db.session import get_db
from quizapp.schemas.attempt import AttemptPublic
from quizapp.schemas.score import GradeCreate, PendingEssay
from quizapp.services import scoring_service

router = APIRouter(prefix="/grades", tags=["grades"])


@router.get("/pending", response_model=List[PendingEssay])
def list_pending_essays(
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
    skip: int = 0,
    limit: int = 100,
):
    return scoring_service.list_ungraded_essays(
        db, teacher=current_teacher, skip=skip, limit=limit
    )


@router.post("/", response_model=AttemptPublic)
def grade_essay(
    grade_in: GradeCreate,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    """
    Teacher grades one essay answer:
      - points stored on the answer (re-grading overwrites)
      - attempt score recomputed from all stored answers
    """
    return scoring_service.grade_essay(
        db,
        grader=current_teacher,
        quiz_id=grade_in.quiz_id,
        student_id=grade_in.student_id,
        question_index=grade_in.question_index,
        points=grade_in.points,
    )
