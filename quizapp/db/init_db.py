# quizapp/db/init_db.py
from quizapp.db.base import Base
from quizapp.db.session import engine


def init_db(bind=engine) -> None:
    Base.metadata.create_all(bind=bind)
