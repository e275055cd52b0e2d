from sqlalchemy import Column, ForeignKey, Integer, String

from gripe_logger.db.session import Base


class UserRole(Base):
    __tablename__ = "user_roles"

    id = Column(Integer, primary_key=True, index=True)
    # One role per user
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    # student | admin
    role = Column(String(16), nullable=False, default="student")
