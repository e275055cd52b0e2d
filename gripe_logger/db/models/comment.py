from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from gripe_logger.db.models._time import utcnow
from gripe_logger.db.session import Base


class ComplaintComment(Base):
    __tablename__ = "complaint_comments"

    id = Column(Integer, primary_key=True, index=True)
    complaint_id = Column(Integer, ForeignKey("complaints.id", ondelete="CASCADE"), nullable=False, index=True)
    # Author; resolved against profiles for display
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
