from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from gripe_logger.model.auth.auth_response import ProfileResponse
from gripe_logger.model.complaint.complaint_enum import ComplaintPriority, ComplaintStatus


class ComplaintResponse(BaseModel):
    id: int
    student_id: str
    title: str
    description: str
    category: Optional[str] = None
    priority: ComplaintPriority
    status: ComplaintStatus
    resolution_note: Optional[str] = None
    assigned_to: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    # owner and still pending
    can_edit: bool = False
    student: Optional[ProfileResponse] = None


class ComplaintListResponse(BaseModel):
    items: List[ComplaintResponse]


class ComplaintStatsResponse(BaseModel):
    total: int
    pending: int
    in_progress: int
    resolved: int
