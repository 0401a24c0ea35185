# rescue_api/database.py

from contextlib import contextmanager
from typing import Generator
import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from rescue_api.core.settings import settings
from rescue_api.core.exceptions import BaseAppException, ConflictError, InternalError

logger = logging.getLogger("Rescue.DB")

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Создаем движок подключения к БД
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.SQL_ECHO,
    connect_args=_connect_args,
)

# Фабрика сессий: каждый запрос получает собственную сессию
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)

def get_db() -> Generator[Session, None, None]:
    """
    Создает сессию базы данных на запрос, гарантирует закрытие после использования.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def transaction(db: Session) -> Generator[Session, None, None]:
    """
    Граница транзакции одной операции: commit при успехе, rollback при любой ошибке.

    IntegrityError превращается в ConflictError, прочие сбои — в InternalError.
    Ошибки приложения пробрасываются как есть.
    """
    try:
        yield db
        db.commit()
    except BaseAppException:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error, transaction rolled back: {e.orig}")
        raise ConflictError("Operation violates a uniqueness or integrity constraint.") from e
    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error, transaction rolled back: {e}", exc_info=True)
        raise InternalError() from e
