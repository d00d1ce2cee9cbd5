# quizapp/api/v1/endpoints/take_quiz.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizapp.core.security import Identity, get_current_identity
from quizapp.db.session import get_db
from quizapp.schemas.quiz import TakeQuizView
from quizapp.services import quiz_service
from quizapp.services.redaction import redact_quiz

router = APIRouter(prefix="/take-quiz", tags=["take-quiz"])


@router.get("/{quiz_id}", response_model=TakeQuizView)
def get_quiz_to_take(
    quiz_id: int,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_identity),
):
    """
    Quiz as a test-taker sees it: timer included, answer keys removed.
    """
    quiz = quiz_service.get_quiz(db, quiz_id)
    return redact_quiz(quiz)
