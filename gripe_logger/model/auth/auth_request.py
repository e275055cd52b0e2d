from pydantic import BaseModel, EmailStr, Field, field_validator


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class SignUpRequest(BaseModel):
    email: EmailStr = Field(..., description="Login email, unique per account")
    # kept verbatim, surrounding spaces are part of the secret
    password: str = Field(..., min_length=6, max_length=128, description="Plain password; stored hashed")
    name: str = Field(..., min_length=1, max_length=255, description="Display name shown on comments")

    @field_validator("email", "name", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return _strip(value)
