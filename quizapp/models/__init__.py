# Package marker
from quizapp.models.quiz import Quiz  # noqa
from quizapp.models.attempt import Attempt  # noqa
