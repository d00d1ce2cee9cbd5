# quizapp/db/base.py
# Import every model here so Base.metadata knows all tables before create_all
from quizapp.db.base_class import Base  # noqa
from quizapp.models.quiz import Quiz  # noqa
from quizapp.models.attempt import Attempt  # noqa
