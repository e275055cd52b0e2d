from sqlalchemy import Column, ForeignKey, String

from gripe_logger.db.session import Base


class Profile(Base):
    __tablename__ = "profiles"

    # Same id as the authenticated identity (1:1)
    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
