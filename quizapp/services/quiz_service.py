# quizapp/services/quiz_service.py
import logging
from typing import List

from sqlalchemy.orm import Session

from quizapp.core.security import Identity
from quizapp.models.quiz import Quiz
from quizapp.schemas.question import Question
from quizapp.schemas.quiz import QuizCreate, QuizUpdate
from quizapp.services import storage
from quizapp.services.errors import NotFoundError, PermissionDenied

logger = logging.getLogger(__name__)


def _dump_questions(questions) -> List[dict]:
    return [q.model_dump() for q in questions]


def create_quiz(
    db: Session,
    *,
    owner: Identity,
    obj_in: QuizCreate,
) -> Quiz:
    """
    teacher creates a quiz
    """
    db_obj = Quiz(
        owner_id=owner.subject_id,
        name=obj_in.name,
        subject=obj_in.subject,
        description=obj_in.description,
        timer=obj_in.timer,
        questions=_dump_questions(obj_in.questions),
    )
    storage.save(db, db_obj)
    logger.info(f"Teacher {owner.subject_id} created quiz {db_obj.id} with {len(db_obj.questions)} questions")
    return db_obj


def get_quiz(db: Session, quiz_id: int) -> Quiz:
    quiz = db.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFoundError(f"quiz {quiz_id} not found")
    return quiz


def get_owned_quiz(db: Session, quiz_id: int, owner: Identity) -> Quiz:
    quiz = get_quiz(db, quiz_id)
    if quiz.owner_id != owner.subject_id:
        raise PermissionDenied("Not allowed to manage this quiz")
    return quiz


def list_quizzes_for_owner(
    db: Session,
    *,
    owner: Identity,
    skip: int = 0,
    limit: int = 100,
) -> List[Quiz]:
    return (
        db.query(Quiz)
        .filter(Quiz.owner_id == owner.subject_id)
        .order_by(Quiz.created_at.desc(), Quiz.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_quizzes(
    db: Session,
    *,
    skip: int = 0,
    limit: int = 100,
) -> List[Quiz]:
    return (
        db.query(Quiz)
        .order_by(Quiz.created_at.desc(), Quiz.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def update_quiz(
    db: Session,
    *,
    db_obj: Quiz,
    obj_in: QuizUpdate,
) -> Quiz:
    """
    owner edits metadata and/or replaces the question list
    """
    update_data = obj_in.model_dump(exclude_unset=True, exclude={"questions"})
    for field, value in update_data.items():
        if value is None and field != "subject":
            continue
        setattr(db_obj, field, value)
    if obj_in.questions is not None:
        db_obj.questions = _dump_questions(obj_in.questions)
    return storage.save(db, db_obj)


def add_question(db: Session, *, db_obj: Quiz, question: Question) -> Quiz:
    db_obj.questions = list(db_obj.questions or []) + [question.model_dump()]
    return storage.save(db, db_obj)


def _check_index(db_obj: Quiz, index: int) -> None:
    if not 0 <= index < len(db_obj.questions or []):
        raise NotFoundError(f"question {index} not found in quiz {db_obj.id}")


def update_question(db: Session, *, db_obj: Quiz, index: int, question: Question) -> Quiz:
    _check_index(db_obj, index)
    questions = list(db_obj.questions)
    questions[index] = question.model_dump()
    db_obj.questions = questions
    return storage.save(db, db_obj)


def remove_question(db: Session, *, db_obj: Quiz, index: int) -> Quiz:
    _check_index(db_obj, index)
    questions = list(db_obj.questions)
    del questions[index]
    db_obj.questions = questions
    return storage.save(db, db_obj)


def delete_quiz(db: Session, *, db_obj: Quiz) -> None:
    """Removes the quiz together with every attempt on it."""
    quiz_id = db_obj.id
    attempt_count = len(db_obj.attempts)
    storage.delete(db, db_obj)
    logger.info(f"Deleted quiz {quiz_id} and {attempt_count} attempts")
