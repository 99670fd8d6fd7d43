"""
Pydantic models for user data.

Registration and login payloads are validated with these models, and
``UserSummary`` is the public view of a user embedded in loan
responses.  The password hash never leaves the store layer.
"""

from pydantic import BaseModel, Field


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRegister(BaseModel):
    """Schema for registering a user."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Jane Doe"])
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN, examples=["jane@example.com"])
    password: str = Field(..., min_length=8, examples=["strongpassword"])


class UserLogin(BaseModel):
    email: str = Field(..., min_length=1, examples=["jane@example.com"])
    password: str = Field(..., min_length=1, examples=["strongpassword"])


class UserSummary(BaseModel):
    """Public identity of a user, as embedded in loans and auth responses."""

    id: int
    name: str
    email: str

    model_config = {
        "from_attributes": True,
    }


class AuthToken(BaseModel):
    """Payload returned by registration and login."""

    user: UserSummary
    access_token: str
    token_type: str = "Bearer"
