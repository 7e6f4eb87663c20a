"""Error response schemas.

All error responses use the same envelope:
{"error": {"code": "...", "message": "..."}, "request_id": "..."}.
Exception handlers in main.py build it from domain exceptions.
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Machine-readable code plus human-readable message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
    request_id: str | None = None
