from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from gripe_logger.db.models._time import utcnow
from gripe_logger.db.session import Base


class Complaint(Base):
    __tablename__ = "complaints"

    id = Column(Integer, primary_key=True, index=True)
    # Owning student; set once at creation
    student_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(32), nullable=True)
    # low | medium | high | urgent
    priority = Column(String(16), default="medium", nullable=False)
    # pending | in_progress | resolved
    status = Column(String(16), default="pending", nullable=False, index=True)
    resolution_note = Column(Text, nullable=True)
    # Admin user handling the complaint
    assigned_to = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)
