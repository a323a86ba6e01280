"""Pydantic DTOs for the footer editor."""

from pydantic import BaseModel, Field


class FooterLinkResponse(BaseModel):
    id: str
    label: str
    url: str


class SocialLinkResponse(BaseModel):
    id: str
    platform: str
    url: str


class FooterResponse(BaseModel):
    text: str
    links: list[FooterLinkResponse]
    social: list[SocialLinkResponse]


class FooterTextUpdate(BaseModel):
    text: str = Field(..., max_length=500)


class FooterEntryUpdate(BaseModel):
    field: str = Field(..., examples=["url"])
    value: str = Field(..., max_length=500)
