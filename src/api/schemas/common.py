"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorItem(BaseModel):
    """One failed request field."""

    msg: str
    param: str | None = None
    location: str | None = None


class ErrorResponse(BaseModel):
    """Standardized application error response."""

    msg: str
    error_code: str
    details: Any | None = None


class ValidationErrorResponse(BaseModel):
    """Request validation failure response."""

    errors: list[ErrorItem]


class MessageResponse(BaseModel):
    """Simple message response."""

    msg: str
