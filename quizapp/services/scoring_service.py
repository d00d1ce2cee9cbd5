# quizapp/services/scoring_service.py
from __future__ import annotations

import copy
import logging
from typing import Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizapp.core.security import Identity
from quizapp.models.attempt import Attempt
from quizapp.models.quiz import Quiz
from quizapp.schemas.question import ESSAY, OBJECTIVE_TYPES
from quizapp.schemas.score import PendingEssay
from quizapp.services.errors import (
    NotFoundError,
    PermissionDenied,
    ServiceError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def is_correct(question: dict, answer) -> bool:
    """Objective answers are compared by option index, never by option text."""
    if question["type"] not in OBJECTIVE_TYPES:
        return False
    return isinstance(answer, int) and answer == question["correct_answer"]


def recompute_score(questions: List[dict], answers: Iterable[dict]) -> int:
    """
    Derive the total from stored answers alone:
      - objective question answered with the key -> its points
      - essay -> the points a grader stored, 0 while ungraded
    """
    by_index = {entry["question_index"]: entry for entry in answers}
    score = 0
    for index, question in enumerate(questions):
        entry = by_index.get(index)
        if entry is None:
            continue
        if question["type"] == ESSAY:
            score += entry.get("points") or 0
        elif is_correct(question, entry.get("answer")):
            score += question["points"]
    return score


def grade_essay(
    db: Session,
    *,
    grader: Identity,
    quiz_id: int,
    student_id: str,
    question_index: int,
    points: int,
) -> Attempt:
    """
    Teacher assigns points to one essay answer, then the attempt's score is
    recomputed from scratch. Re-grading overwrites the previous points.

    All checks run against the question snapshot stored on the attempt, so a
    quiz edited after submission does not move the ceiling or the index.
    """
    quiz = db.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFoundError(f"quiz {quiz_id} not found")
    if quiz.owner_id != grader.subject_id:
        raise PermissionDenied("Not allowed to grade attempts for this quiz")

    try:
        attempt = (
            db.query(Attempt)
            .filter(Attempt.quiz_id == quiz_id, Attempt.student_id == student_id)
            .with_for_update()
            .first()
        )
        if attempt is None:
            raise NotFoundError(
                f"no attempt for quiz {quiz_id} by student {student_id}"
            )

        questions = attempt.questions or []
        if not 0 <= question_index < len(questions):
            raise NotFoundError(f"question {question_index} not found in quiz {quiz_id}")

        question = questions[question_index]
        if question["type"] != ESSAY:
            raise ValidationError(
                f"question {question_index} is {question['type']}, only essays can be graded"
            )
        if points < 0 or points > question["points"]:
            raise ValidationError(
                f"points must be between 0 and {question['points']} for question {question_index}"
            )

        # JSON columns only notice reassignment, so work on a copy
        answers = copy.deepcopy(attempt.answers or [])
        entry = next((a for a in answers if a["question_index"] == question_index), None)
        if entry is None:
            raise NotFoundError(
                f"attempt {attempt.id} has no answer for question {question_index}"
            )

        entry["points"] = points
        attempt.answers = answers
        attempt.score = recompute_score(questions, answers)

        db.add(attempt)
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            f"Grading failed for quiz {quiz_id}, student {student_id}: {e}",
            exc_info=True,
        )
        raise StorageError("Database write failed") from e

    db.refresh(attempt)
    logger.info(
        f"Graded question {question_index} of attempt {attempt.id} with {points} points; "
        f"score={attempt.score}"
    )
    return attempt


def list_ungraded_essays(
    db: Session,
    *,
    teacher: Identity,
    skip: int = 0,
    limit: int = 100,
) -> List[PendingEssay]:
    """
    Essay answers that still need a teacher:
      - attempt belongs to one of the teacher's quizzes
      - the essay entry has no points yet
    """
    attempts = (
        db.query(Attempt)
        .join(Quiz, Attempt.quiz_id == Quiz.id)
        .filter(Quiz.owner_id == teacher.subject_id)
        .order_by(Attempt.created_at.asc(), Attempt.id.asc())
        .all()
    )

    pending: List[PendingEssay] = []
    for attempt in attempts:
        questions = attempt.questions or []
        for entry in attempt.answers or []:
            index = entry["question_index"]
            if index >= len(questions) or questions[index]["type"] != ESSAY:
                continue
            if entry.get("points") is None:
                pending.append(
                    PendingEssay(
                        attempt_id=attempt.id,
                        quiz_id=attempt.quiz_id,
                        student_id=attempt.student_id,
                        question_index=index,
                        max_points=questions[index]["points"],
                    )
                )
    return pending[skip:skip + limit]
