"""Shared Pydantic schemas for Little Bell."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str = "0.1.0"
    service: str = "little-bell"


class ErrorResponse(BaseModel):
    error: str
    code: str
