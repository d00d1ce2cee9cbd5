# quizapp/services/submission_service.py
import copy
import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from quizapp.models.attempt import Attempt
from quizapp.models.quiz import Quiz
from quizapp.schemas.question import ESSAY
from quizapp.services.errors import NotFoundError, StorageError, ValidationError
from quizapp.services.scoring_service import recompute_score

logger = logging.getLogger(__name__)

# Objective questions left unanswered are submitted as -1
UNANSWERED = -1


def get_attempt(db: Session, quiz_id: int, student_id: str) -> Optional[Attempt]:
    return (
        db.query(Attempt)
        .filter(Attempt.quiz_id == quiz_id, Attempt.student_id == student_id)
        .first()
    )


def validate_responses(questions: List[dict], responses: Sequence) -> None:
    if len(responses) != len(questions):
        raise ValidationError(
            f"expected {len(questions)} responses, got {len(responses)}"
        )

    for index, (question, response) in enumerate(zip(questions, responses)):
        if question["type"] == ESSAY:
            if not isinstance(response, str):
                raise ValidationError(f"response {index} must be text for an essay question")
            continue

        if isinstance(response, bool) or not isinstance(response, int):
            raise ValidationError(f"response {index} must be an option index")
        option_count = len(question.get("options") or [])
        if response != UNANSWERED and not 0 <= response < option_count:
            raise ValidationError(
                f"response {index} must be -1 or an option index below {option_count}"
            )


def submit_attempt(
    db: Session,
    *,
    quiz_id: int,
    student_id: str,
    responses: Sequence,
    time_spent: int,
) -> Tuple[Attempt, bool]:
    """
    Student submits a whole quiz once.

    Returns ``(attempt, created)``. A second submission for the same
    (quiz, student) is not an error: the stored attempt comes back untouched
    with ``created=False``.
    """
    if quiz_id is None or not student_id:
        raise ValidationError("quiz_id and student_id are required")
    if isinstance(time_spent, bool) or not isinstance(time_spent, int) or time_spent < 0:
        raise ValidationError("time_spent must be a non-negative number of seconds")
    if responses is None:
        raise ValidationError("responses are required")

    quiz = db.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFoundError(f"quiz {quiz_id} not found")

    existing = get_attempt(db, quiz_id, student_id)
    if existing is not None:
        logger.info(f"Quiz {quiz_id} already taken by student {student_id}; returning attempt {existing.id}")
        return existing, False

    questions = copy.deepcopy(quiz.questions or [])
    validate_responses(questions, responses)

    answers = [
        {"question_index": index, "answer": response}
        for index, response in enumerate(responses)
    ]
    attempt = Attempt(
        quiz_id=quiz_id,
        student_id=student_id,
        answers=answers,
        questions=questions,
        time_spent=time_spent,
        score=recompute_score(questions, answers),
    )

    try:
        db.add(attempt)
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent submission; theirs is the attempt
        db.rollback()
        existing = get_attempt(db, quiz_id, student_id)
        if existing is None:
            logger.error(f"Attempt insert for quiz {quiz_id} rejected without a stored attempt")
            raise StorageError("Attempt could not be stored")
        logger.info(f"Concurrent submission for quiz {quiz_id} by student {student_id}; keeping attempt {existing.id}")
        return existing, False
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Submission failed for quiz {quiz_id}, student {student_id}: {e}", exc_info=True)
        raise StorageError("Database write failed") from e

    db.refresh(attempt)
    logger.info(
        f"Stored attempt {attempt.id} for quiz {quiz_id} by student {student_id}: "
        f"score={attempt.score}, time_spent={time_spent}s"
    )
    return attempt, True


def list_attempts_for_student(
    db: Session,
    *,
    student_id: str,
    skip: int = 0,
    limit: int = 100,
) -> List[Attempt]:
    return (
        db.query(Attempt)
        .filter(Attempt.student_id == student_id)
        .order_by(Attempt.created_at.desc(), Attempt.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_attempts_for_quiz(
    db: Session,
    *,
    quiz_id: int,
    skip: int = 0,
    limit: int = 100,
) -> List[Attempt]:
    """
    Teacher views every student's attempt on one quiz
    """
    return (
        db.query(Attempt)
        .filter(Attempt.quiz_id == quiz_id)
        .order_by(Attempt.created_at.asc(), Attempt.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )
