# quizapp/models/attempt.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    JSON,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from quizapp.db.base_class import Base


class Attempt(Base):
    __tablename__ = "attempts"
    # At most one attempt per student per quiz; this is what makes duplicate
    # submissions safe under concurrency.
    __table_args__ = (
        UniqueConstraint("quiz_id", "student_id", name="uq_attempt_quiz_student"),
    )

    id = Column(Integer, primary_key=True, index=True)

    quiz_id = Column(
        Integer,
        ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id = Column(String(64), nullable=False, index=True)

    # [{"question_index": int, "answer": int | str, "points"?: int}]
    answers = Column(JSON, nullable=False, default=list)
    # Questions as they were when the attempt was submitted
    questions = Column(JSON, nullable=False, default=list)

    time_spent = Column(Integer, nullable=False, default=0)  # seconds
    score = Column(Integer, nullable=False, default=0)

    quiz = relationship("Quiz", back_populates="attempts")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
