"""Pydantic DTOs for the public contact and review forms.

Length limits mirror the form inputs; they bound what this API accepts and
are not re-checked anywhere downstream.
"""

from pydantic import BaseModel, EmailStr, Field


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Jane Doe"])
    email: EmailStr = Field(..., examples=["jane@example.com"])
    phone: str = Field(..., min_length=1, max_length=40, examples=["+1 555 0100"])
    description: str = Field(..., min_length=1, max_length=1000)


class ReviewCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50, examples=["jane"])
    rating: int = Field(5, examples=[5])
    description: str = Field(..., min_length=1, max_length=500)


class ContactResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    description: str
    timestamp: int


class ActivityLogResponse(BaseModel):
    id: str
    action: str
    section: str
    timestamp: int


class SubmissionResponse(BaseModel):
    id: str
    message: str
