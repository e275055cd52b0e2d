import uuid

from sqlalchemy import Column, DateTime, String

from gripe_logger.db.models._time import utcnow
from gripe_logger.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Stored lower-cased
    email = Column(String(255), unique=True, nullable=False, index=True)
    # werkzeug password hash, never the raw password
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
