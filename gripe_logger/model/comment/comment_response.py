from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from gripe_logger.model.auth.auth_response import ProfileResponse


class CommentResponse(BaseModel):
    id: int
    complaint_id: int
    user_id: str
    content: str
    created_at: datetime
    author: Optional[ProfileResponse] = None


class CommentListResponse(BaseModel):
    items: List[CommentResponse]
