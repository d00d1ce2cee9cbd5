from quizapp.models.quiz import Quiz
from quizapp.services.redaction import redact_quiz


def _stored_quiz(questions):
    return Quiz(
        id=7,
        owner_id="teacher-1",
        name="Stored",
        subject=None,
        description="",
        timer=5,
        questions=questions,
    )


def test_redacted_view_has_no_answer_keys(quiz):
    view = redact_quiz(quiz).model_dump()

    assert view["timer"] == 1
    assert len(view["questions"]) == 3
    for question in view["questions"]:
        assert "correct_answer" not in question


def test_redaction_normalises_options_whatever_was_stored():
    quiz = _stored_quiz(
        [
            {"type": "true-false", "question": "T?", "options": [], "correct_answer": 1, "points": 1},
            {"type": "essay", "question": "Why?", "options": ["leftover"], "correct_answer": "", "points": 6},
            {"type": "multiple-choice", "question": "Pick", "options": ["a", "b", "c"], "correct_answer": 2, "points": 3},
        ]
    )

    questions = redact_quiz(quiz).model_dump()["questions"]

    assert questions[0]["options"] == ["True", "False"]
    assert questions[1]["options"] == []
    assert questions[2]["options"] == ["a", "b", "c"]
    assert [q["points"] for q in questions] == [1, 6, 3]
    assert [q["question"] for q in questions] == ["T?", "Why?", "Pick"]


def test_redaction_leaves_stored_quiz_untouched():
    stored = [{"type": "true-false", "question": "T?", "options": [], "correct_answer": 1, "points": 1}]
    quiz = _stored_quiz(stored)

    redact_quiz(quiz)

    assert quiz.questions[0]["correct_answer"] == 1
    assert quiz.questions[0]["options"] == []
