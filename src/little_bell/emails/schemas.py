"""Pydantic schemas for email endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class EmailCreate(BaseModel):
    subject: Optional[str] = None
    recipient: Optional[str] = Field(default=None, max_length=320)


class EmailCreateResponse(BaseModel):
    email_id: int
    tracking_pixel_url: str


class ClickUrlResponse(BaseModel):
    click_url: str
    original_url: str
