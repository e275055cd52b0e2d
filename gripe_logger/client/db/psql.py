from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gripe_logger.db.session import SessionLocal

logger = logging.getLogger(__name__)


@contextmanager
def session_scope() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except SQLAlchemyError:
        logger.exception("database transaction failed, rolling back")
        db.rollback()
        raise
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
