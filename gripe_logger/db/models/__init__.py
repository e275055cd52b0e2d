from .attachment import ComplaintAttachment
from .auth_session import AuthSession
from .comment import ComplaintComment
from .complaint import Complaint
from .profile import Profile
from .user import User
from .user_role import UserRole

__all__ = ["AuthSession", "Complaint", "ComplaintAttachment", "ComplaintComment", "Profile", "User", "UserRole"]
