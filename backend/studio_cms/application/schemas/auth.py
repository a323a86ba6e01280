"""Pydantic DTOs for sign-in, sign-out and password reset."""

from pydantic import BaseModel, Field


class SignInRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class ResetRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)


class SessionResponse(BaseModel):
    authenticated: bool
    loading: bool = False
    email: str | None = None
    token: str | None = None
