"""Pydantic DTOs for sign-in, sign-up and the current session."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field("", examples=["editor@example.com"])
    password: str = ""


class SignupRequest(BaseModel):
    email: str = Field("", examples=["editor@example.com"])
    password: str = ""
    confirm_password: str = ""


class UserResponse(BaseModel):
    id: str
    email: str

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    """The authenticated caller as resolved from the session cookie."""

    user: UserResponse


class MessageResponse(BaseModel):
    message: str
