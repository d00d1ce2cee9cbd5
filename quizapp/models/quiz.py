# quizapp/models/quiz.py
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from quizapp.db.base_class import Base


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(64), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    subject = Column(String(100), nullable=True)
    description = Column(Text, nullable=False, default="")
    timer = Column(Integer, nullable=False)  # minutes

    # Embedded, ordered question documents; list position is the question index
    questions = Column(JSON, nullable=False, default=list)

    attempts = relationship(
        "Attempt",
        back_populates="quiz",
        cascade="all, delete-orphan",
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
