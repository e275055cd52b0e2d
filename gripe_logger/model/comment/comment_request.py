from pydantic import BaseModel, ConfigDict, Field


class CommentCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1, max_length=2000, description="Comment or status update text")
