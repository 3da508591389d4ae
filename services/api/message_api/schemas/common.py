"""Common schemas used across the API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": { "code": str, "message": str, "detail": object } }
    """

    error: ErrorDetail


class Audit(BaseModel):
    """Creation/modification metadata stamped by the persistence layer.

    Clients may send it, but stores always overwrite it.
    """

    created_on: datetime | None = Field(alias="createdOn", default=None)
    updated_on: datetime | None = Field(alias="updatedOn", default=None)
    created_by: str | None = Field(alias="createdBy", default=None)
    modified_by: str | None = Field(alias="modifiedBy", default=None)

    model_config = {"populate_by_name": True}
