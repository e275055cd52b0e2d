from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

import gripe_logger.config.config as configs
from gripe_logger.model.complaint.complaint_enum import ComplaintPriority, ComplaintStatus


def _check_category(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if value not in configs.COMPLAINT_CATEGORIES:
        raise ValueError(f"category must be one of {', '.join(configs.COMPLAINT_CATEGORIES)}")
    return value


class ComplaintCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=5, max_length=100, description="Brief summary of the complaint")
    description: str = Field(..., min_length=10, max_length=1000)
    category: Optional[str] = None
    priority: ComplaintPriority = ComplaintPriority.MEDIUM

    @field_validator("category")
    @classmethod
    def check_category(cls, value: Optional[str]) -> Optional[str]:
        return _check_category(value)


class ComplaintEditRequest(BaseModel):
    """Partial update: only the fields present in the payload change. An explicit null or blank category clears it."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=5, max_length=100)
    description: Optional[str] = Field(default=None, min_length=10, max_length=1000)
    category: Optional[str] = None
    priority: Optional[ComplaintPriority] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, value: Optional[str]) -> Optional[str]:
        return _check_category(value)


class ComplaintAdminUpdateRequest(BaseModel):
    """Only the fields present in the payload are applied; an explicit null clears note/assignee."""

    status: Optional[ComplaintStatus] = None
    resolution_note: Optional[str] = Field(default=None, max_length=2000)
    assigned_to: Optional[str] = None

    @field_validator("resolution_note")
    @classmethod
    def blank_note_is_null(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None
