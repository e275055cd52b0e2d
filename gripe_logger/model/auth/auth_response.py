from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from gripe_logger.model.auth.role import Role


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    profile: ProfileResponse
    role: Optional[Role] = None


class MeResponse(BaseModel):
    profile: Optional[ProfileResponse] = None
    role: Optional[Role] = None
