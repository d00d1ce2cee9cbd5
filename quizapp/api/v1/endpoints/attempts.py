# quizapp/api/v1/endpoints/attempts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from quizapp.core.security import Identity, get_current_student, get_current_teacher
from quizapp.db.session import get_db
from quizapp.schemas.attempt import AttemptPublic, AttemptSubmit, AttemptSummary, SubmitResult
from quizapp.services import quiz_service, submission_service

router = APIRouter(prefix="/attempts", tags=["attempts"])


@router.post("/", response_model=SubmitResult, status_code=status.HTTP_201_CREATED)
def submit_attempt(
    obj_in: AttemptSubmit,
    response: Response,
    db: Session = Depends(get_db),
    current_student: Identity = Depends(get_current_student),
):
    """
    Student submits the whole quiz. Submitting again returns the stored
    attempt with 200 instead of scoring a second one.
    """
    if obj_in.student_id is not None and obj_in.student_id != current_student.subject_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot submit on behalf of another student",
        )

    attempt, created = submission_service.submit_attempt(
        db,
        quiz_id=obj_in.quiz_id,
        student_id=current_student.subject_id,
        responses=obj_in.responses,
        time_spent=obj_in.time_spent,
    )
    if not created:
        response.status_code = status.HTTP_200_OK
        return SubmitResult(
            message="Quiz already taken",
            created=False,
            result=AttemptPublic.model_validate(attempt),
        )
    return SubmitResult(
        message="Submission successful",
        created=True,
        result=AttemptPublic.model_validate(attempt),
    )


@router.get("/me", response_model=List[AttemptPublic])
def list_my_attempts(
    db: Session = Depends(get_db),
    current_student: Identity = Depends(get_current_student),
    skip: int = 0,
    limit: int = 100,
):
    return submission_service.list_attempts_for_student(
        db, student_id=current_student.subject_id, skip=skip, limit=limit
    )


@router.get("/{quiz_id}/me", response_model=AttemptPublic)
def get_my_attempt(
    quiz_id: int,
    db: Session = Depends(get_db),
    current_student: Identity = Depends(get_current_student),
):
    attempt = submission_service.get_attempt(db, quiz_id, current_student.subject_id)
    if attempt is None:
        raise HTTPException(status_code=404, detail="No submission found")
    return attempt


@router.get("/{quiz_id}", response_model=List[AttemptSummary])
def list_attempts_for_quiz(
    quiz_id: int,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
    skip: int = 0,
    limit: int = 100,
):
    """
    Quiz owner sees every student's attempt with its current score.
    """
    quiz_service.get_owned_quiz(db, quiz_id, current_teacher)
    return submission_service.list_attempts_for_quiz(
        db, quiz_id=quiz_id, skip=skip, limit=limit
    )
