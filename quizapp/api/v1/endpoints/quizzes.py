# quizapp/api/v1/endpoints/quizzes.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quizapp.core.security import Identity, get_current_identity, get_current_teacher
from quizapp.db.session import get_db
from quizapp.schemas.question import Question
from quizapp.schemas.quiz import QuizCreate, QuizPublic, QuizUpdate, TakeQuizView
from quizapp.services import quiz_service
from quizapp.services.redaction import redact_quiz

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.post("/", response_model=QuizPublic, status_code=status.HTTP_201_CREATED)
def create_quiz(
    obj_in: QuizCreate,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    """
    Teacher creates a quiz.
    """
    return quiz_service.create_quiz(db, owner=current_teacher, obj_in=obj_in)


@router.get("/", response_model=List[TakeQuizView])
def list_quizzes(
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_identity),
    skip: int = 0,
    limit: int = 100,
):
    """
    Browse all quizzes; answer keys are never included here.
    """
    quizzes = quiz_service.list_quizzes(db, skip=skip, limit=limit)
    return [redact_quiz(q) for q in quizzes]


@router.get("/mine", response_model=List[QuizPublic])
def list_my_quizzes(
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
    skip: int = 0,
    limit: int = 100,
):
    return quiz_service.list_quizzes_for_owner(
        db, owner=current_teacher, skip=skip, limit=limit
    )


@router.get("/{quiz_id}", response_model=QuizPublic)
def get_quiz(
    quiz_id: int,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    return quiz_service.get_owned_quiz(db, quiz_id, current_teacher)


@router.put("/{quiz_id}", response_model=QuizPublic)
def update_quiz(
    quiz_id: int,
    obj_in: QuizUpdate,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    quiz = quiz_service.get_owned_quiz(db, quiz_id, current_teacher)
    return quiz_service.update_quiz(db, db_obj=quiz, obj_in=obj_in)


@router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quiz(
    quiz_id: int,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    quiz = quiz_service.get_owned_quiz(db, quiz_id, current_teacher)
    quiz_service.delete_quiz(db, db_obj=quiz)
    return None


@router.post(
    "/{quiz_id}/questions",
    response_model=QuizPublic,
    status_code=status.HTTP_201_CREATED,
)
def add_question(
    quiz_id: int,
    question: Question,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    quiz = quiz_service.get_owned_quiz(db, quiz_id, current_teacher)
    return quiz_service.add_question(db, db_obj=quiz, question=question)


@router.put("/{quiz_id}/questions/{index}", response_model=QuizPublic)
def update_question(
    quiz_id: int,
    index: int,
    question: Question,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    quiz = quiz_service.get_owned_quiz(db, quiz_id, current_teacher)
    return quiz_service.update_question(db, db_obj=quiz, index=index, question=question)


@router.delete("/{quiz_id}/questions/{index}", response_model=QuizPublic)
def remove_question(
    quiz_id: int,
    index: int,
    db: Session = Depends(get_db),
    current_teacher: Identity = Depends(get_current_teacher),
):
    quiz = quiz_service.get_owned_quiz(db, quiz_id, current_teacher)
    return quiz_service.remove_question(db, db_obj=quiz, index=index)
