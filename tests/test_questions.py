import pytest
from pydantic import TypeAdapter, ValidationError

from quizapp.schemas.question import (
    EssayQuestion,
    MultipleChoiceQuestion,
    Question,
    TrueFalseQuestion,
)
from quizapp.schemas.quiz import QuizCreate

question_adapter = TypeAdapter(Question)


def test_type_selects_variant():
    mc = question_adapter.validate_python(
        {"type": "multiple-choice", "question": "Q", "options": ["a", "b"], "correct_answer": 0, "points": 1}
    )
    tf = question_adapter.validate_python({"type": "true-false", "question": "Q", "correct_answer": 1, "points": 1})
    essay = question_adapter.validate_python({"type": "essay", "question": "Q", "points": 3})

    assert isinstance(mc, MultipleChoiceQuestion)
    assert isinstance(tf, TrueFalseQuestion)
    assert isinstance(essay, EssayQuestion)


def test_unknown_type_rejected():
    with pytest.raises(ValidationError):
        question_adapter.validate_python({"type": "matching", "question": "Q", "points": 1})


@pytest.mark.parametrize("correct_answer", [-1, 2, "1", True])
def test_multiple_choice_key_must_index_options(correct_answer):
    with pytest.raises(ValidationError):
        question_adapter.validate_python(
            {
                "type": "multiple-choice",
                "question": "Q",
                "options": ["a", "b"],
                "correct_answer": correct_answer,
                "points": 1,
            }
        )


def test_multiple_choice_needs_two_options():
    with pytest.raises(ValidationError):
        question_adapter.validate_python(
            {"type": "multiple-choice", "question": "Q", "options": ["only"], "correct_answer": 0, "points": 1}
        )


def test_true_false_options_are_fixed():
    tf = question_adapter.validate_python(
        {"type": "true-false", "question": "Q", "options": ["Yes", "No", "Maybe"], "correct_answer": 1, "points": 2}
    )
    assert tf.options == ["True", "False"]
    assert tf.model_dump()["correct_answer"] == 1


def test_true_false_key_defaults_to_true():
    tf = question_adapter.validate_python({"type": "true-false", "question": "Q", "points": 2})
    assert tf.correct_answer == 0
    assert tf.options == ["True", "False"]


def test_true_false_key_out_of_range():
    with pytest.raises(ValidationError):
        question_adapter.validate_python({"type": "true-false", "question": "Q", "correct_answer": 2, "points": 2})


def test_essay_key_is_always_empty_string():
    essay = question_adapter.validate_python(
        {"type": "essay", "question": "Q", "options": ["stray"], "points": 4}
    )
    assert essay.correct_answer == ""
    assert essay.options == []

    with pytest.raises(ValidationError):
        question_adapter.validate_python({"type": "essay", "question": "Q", "correct_answer": 0, "points": 4})


@pytest.mark.parametrize("points", [0, -3, 1.5])
def test_points_must_be_positive_integer(points):
    with pytest.raises(ValidationError):
        question_adapter.validate_python({"type": "essay", "question": "Q", "points": points})


def test_quiz_timer_must_be_positive():
    with pytest.raises(ValidationError):
        QuizCreate(name="Quiz", timer=0)
