from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class AttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    complaint_id: int
    file_name: str
    file_path: str
    file_size: int
    content_type: Optional[str] = None
    uploaded_by: str
    created_at: datetime


class AttachmentListResponse(BaseModel):
    items: List[AttachmentResponse]


class UploadStatus(str, Enum):
    UPLOADED = "uploaded"
    REJECTED = "rejected"
    FAILED = "failed"


class UploadOutcome(BaseModel):
    file_name: str
    status: UploadStatus
    detail: Optional[str] = None
    attachment: Optional[AttachmentResponse] = None


class UploadResponse(BaseModel):
    results: List[UploadOutcome]
