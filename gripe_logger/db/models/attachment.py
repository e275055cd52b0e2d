from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from gripe_logger.db.models._time import utcnow
from gripe_logger.db.session import Base


class ComplaintAttachment(Base):
    __tablename__ = "complaint_attachments"

    id = Column(Integer, primary_key=True, index=True)
    complaint_id = Column(Integer, ForeignKey("complaints.id", ondelete="CASCADE"), nullable=False, index=True)
    # Original client-side file name
    file_name = Column(String(255), nullable=False)
    # Blob key: {uploader}/{complaint}/{epoch_ms}.{ext}
    file_path = Column(String(512), nullable=False, unique=True)
    file_size = Column(Integer, nullable=False)
    content_type = Column(String(255), nullable=True)
    uploaded_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
