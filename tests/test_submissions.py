import pytest

from quizapp.models.attempt import Attempt
from quizapp.services import submission_service
from quizapp.services.errors import NotFoundError, ValidationError


def _submit(db, quiz, responses, student_id="student-1", time_spent=42):
    return submission_service.submit_attempt(
        db,
        quiz_id=quiz.id,
        student_id=student_id,
        responses=responses,
        time_spent=time_spent,
    )


def test_objective_questions_scored_essay_left_ungraded(db_session, quiz):
    attempt, created = _submit(db_session, quiz, [1, 0, "my answer"])

    assert created is True
    assert attempt.score == 7
    assert attempt.time_spent == 42
    assert attempt.answers == [
        {"question_index": 0, "answer": 1},
        {"question_index": 1, "answer": 0},
        {"question_index": 2, "answer": "my answer"},
    ]
    assert "points" not in attempt.answers[2]


def test_wrong_answers_score_nothing(db_session, quiz):
    attempt, _ = _submit(db_session, quiz, [2, 1, "essay"])
    assert attempt.score == 0


def test_unanswered_quiz_scores_zero(db_session, quiz):
    attempt, created = _submit(db_session, quiz, [-1, -1, ""])
    assert created is True
    assert attempt.score == 0


def test_second_submission_returns_first_attempt(db_session, quiz):
    first, _ = _submit(db_session, quiz, [1, 0, "first"])
    second, created = _submit(db_session, quiz, [0, 1, "second"], time_spent=5)

    assert created is False
    assert second.id == first.id
    assert second.score == 7
    assert second.time_spent == 42
    assert second.answers[2]["answer"] == "first"
    assert db_session.query(Attempt).count() == 1


def test_duplicate_check_wins_over_malformed_retry(db_session, quiz):
    first, _ = _submit(db_session, quiz, [1, 0, "first"])
    again, created = _submit(db_session, quiz, [1])

    assert created is False
    assert again.id == first.id


def test_students_get_separate_attempts(db_session, quiz):
    a, _ = _submit(db_session, quiz, [1, 0, ""], student_id="student-1")
    b, _ = _submit(db_session, quiz, [0, 0, ""], student_id="student-2")

    assert a.id != b.id
    assert (a.score, b.score) == (7, 2)


def test_attempt_keeps_question_snapshot(db_session, quiz):
    attempt, _ = _submit(db_session, quiz, [1, 0, ""])
    assert attempt.questions == quiz.questions
    assert attempt.questions is not quiz.questions


@pytest.mark.parametrize(
    "responses",
    [
        [1, 0],
        [1, 0, "essay", 3],
        ["1", 0, "essay"],
        [1, True, "essay"],
        [1, 0, 5],
        [4, 0, "essay"],
        [1, 2, "essay"],
        [-2, 0, "essay"],
    ],
)
def test_malformed_responses_rejected(db_session, quiz, responses):
    with pytest.raises(ValidationError):
        _submit(db_session, quiz, responses)
    assert db_session.query(Attempt).count() == 0


def test_negative_time_rejected(db_session, quiz):
    with pytest.raises(ValidationError):
        _submit(db_session, quiz, [1, 0, ""], time_spent=-1)


def test_missing_student_rejected(db_session, quiz):
    with pytest.raises(ValidationError):
        _submit(db_session, quiz, [1, 0, ""], student_id="")


def test_unknown_quiz(db_session):
    with pytest.raises(NotFoundError):
        submission_service.submit_attempt(
            db_session, quiz_id=999, student_id="student-1", responses=[], time_spent=0
        )


def test_concurrent_insert_resolved_by_unique_constraint(db_session, quiz, monkeypatch):
    winner, _ = _submit(db_session, quiz, [1, 0, "winner"])

    real_get_attempt = submission_service.get_attempt
    calls = []

    def racing_get_attempt(db, quiz_id, student_id):
        # The first lookup runs before the other request committed
        calls.append(quiz_id)
        if len(calls) == 1:
            return None
        return real_get_attempt(db, quiz_id, student_id)

    monkeypatch.setattr(submission_service, "get_attempt", racing_get_attempt)

    loser, created = _submit(db_session, quiz, [0, 1, "loser"])

    assert created is False
    assert loser.id == winner.id
    assert loser.score == 7
    assert db_session.query(Attempt).count() == 1


def test_list_attempts_for_quiz_and_student(db_session, quiz):
    _submit(db_session, quiz, [1, 0, ""], student_id="student-1")
    _submit(db_session, quiz, [1, 1, ""], student_id="student-2")

    for_quiz = submission_service.list_attempts_for_quiz(db_session, quiz_id=quiz.id)
    mine = submission_service.list_attempts_for_student(db_session, student_id="student-2")

    assert [a.student_id for a in for_quiz] == ["student-1", "student-2"]
    assert [a.score for a in mine] == [5]
