# quizapp/services/storage.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizapp.services.errors import StorageError

logger = logging.getLogger(__name__)


def save(db: Session, obj):
    """Add, commit and refresh ``obj``; any database failure rolls back."""
    try:
        db.add(obj)
        db.commit()
        db.refresh(obj)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save {type(obj).__name__}: {e}", exc_info=True)
        raise StorageError("Database write failed") from e
    return obj


def delete(db: Session, obj) -> None:
    try:
        db.delete(obj)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete {type(obj).__name__}: {e}", exc_info=True)
        raise StorageError("Database delete failed") from e
