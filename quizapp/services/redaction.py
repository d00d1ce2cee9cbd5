# quizapp/services/redaction.py
"""Strip answer keys from a quiz before it is handed to a test-taker."""
from quizapp.models.quiz import Quiz
from quizapp.schemas.question import ESSAY, TRUE_FALSE, TRUE_FALSE_OPTIONS, RedactedQuestion
from quizapp.schemas.quiz import TakeQuizView


def redact_question(question: dict) -> dict:
    redacted = {key: value for key, value in question.items() if key != "correct_answer"}
    if question["type"] == TRUE_FALSE:
        redacted["options"] = list(TRUE_FALSE_OPTIONS)
    elif question["type"] == ESSAY:
        redacted["options"] = []
    else:
        redacted["options"] = list(question.get("options") or [])
    return redacted


def redact_quiz(quiz: Quiz) -> TakeQuizView:
    return TakeQuizView(
        id=quiz.id,
        name=quiz.name,
        subject=quiz.subject,
        description=quiz.description,
        timer=quiz.timer,
        questions=[RedactedQuestion(**redact_question(q)) for q in quiz.questions or []],
    )
