# quizapp/services/stats_service.py
from sqlalchemy import func
from sqlalchemy.orm import Session

from quizapp.core.security import Identity
from quizapp.models.attempt import Attempt
from quizapp.models.quiz import Quiz
from quizapp.schemas.score import Dashboard, QuizAverage, QuizSummary, RecentAttempt

RECENT_ATTEMPTS_LIMIT = 5


def max_possible_score(questions) -> int:
    return sum(q["points"] for q in questions or [])


def quiz_summary(db: Session, *, quiz: Quiz) -> QuizSummary:
    submissions, average, lowest, highest = (
        db.query(
            func.count(Attempt.id),
            func.avg(Attempt.score),
            func.min(Attempt.score),
            func.max(Attempt.score),
        )
        .filter(Attempt.quiz_id == quiz.id)
        .one()
    )
    return QuizSummary(
        quiz_id=quiz.id,
        name=quiz.name,
        submissions=submissions,
        average_score=float(average) if average is not None else None,
        min_score=lowest,
        max_score=highest,
        max_possible_score=max_possible_score(quiz.questions),
    )


def dashboard(db: Session, *, owner: Identity) -> Dashboard:
    """
    Teacher overview across their own quizzes:
      - how many quizzes and attempts
      - average score per quiz that has at least one attempt
      - the latest submissions, newest first
    """
    total_quizzes = (
        db.query(func.count(Quiz.id))
        .filter(Quiz.owner_id == owner.subject_id)
        .scalar()
    )

    rows = (
        db.query(
            Quiz.id,
            Quiz.name,
            func.count(Attempt.id),
            func.avg(Attempt.score),
        )
        .join(Attempt, Attempt.quiz_id == Quiz.id)
        .filter(Quiz.owner_id == owner.subject_id)
        .group_by(Quiz.id, Quiz.name)
        .order_by(Quiz.id.asc())
        .all()
    )

    averages = [
        QuizAverage(
            quiz_id=quiz_id,
            quiz_name=name,
            submissions=count,
            average_score=float(average),
        )
        for quiz_id, name, count, average in rows
    ]

    recent = (
        db.query(Attempt, Quiz.name)
        .join(Quiz, Attempt.quiz_id == Quiz.id)
        .filter(Quiz.owner_id == owner.subject_id)
        .order_by(Attempt.created_at.desc(), Attempt.id.desc())
        .limit(RECENT_ATTEMPTS_LIMIT)
        .all()
    )

    return Dashboard(
        total_quizzes=total_quizzes or 0,
        total_attempts=sum(a.submissions for a in averages),
        average_scores=averages,
        recent_attempts=[
            RecentAttempt(
                attempt_id=attempt.id,
                quiz_id=attempt.quiz_id,
                quiz_name=quiz_name,
                student_id=attempt.student_id,
                score=attempt.score,
                created_at=attempt.created_at,
            )
            for attempt, quiz_name in recent
        ],
    )
