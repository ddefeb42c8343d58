"""
Employee Directory API - Response Envelopes
============================================

What:  The only response shapes the API produces, and the builders for them.
Who:   Routers build success envelopes; exception handlers in main.py build
       error envelopes. Nothing else formats a response body.

Shapes:
    Success            {"status": "success", "message": "...", "data": ...}
                       (message and/or data; delete responses carry only message)
    Error              {"status": "error", "message": "..."}
    Validation error   {"error": "Validation error: Body: Name is required, ..."}

The validation shape is kept distinct from the error envelope for compatibility
with existing API consumers; both are declared in the OpenAPI document.
"""

from typing import Any, Dict, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class SuccessEnvelope(BaseModel, Generic[DataT]):
    status: Literal["success"] = Field(default="success")
    message: Optional[str] = Field(default=None, description="Human-readable result")
    data: Optional[DataT] = Field(default=None, description="Record, list of records, or absent")


class ErrorEnvelope(BaseModel):
    status: Literal["error"] = Field(default="error")
    message: str = Field(description="Human-readable error description")


class ValidationErrorResponse(BaseModel):
    error: str = Field(
        description="'Validation error: ' followed by every violation, comma separated",
        examples=["Validation error: Body: Address cannot be empty"],
    )


class HealthResponse(BaseModel):
    status: str = Field(description="Always 'OK' when the process can answer")
    uptime: float = Field(description="Seconds since the service started")
    timestamp: str = Field(description="Current server time (UTC ISO 8601)")
    version: str = Field(description="Application version")


# ══════════════════════════════════════════════════════════════════════════
# Builders
# ══════════════════════════════════════════════════════════════════════════

def success_response(message: Optional[str] = None, data: Any = None) -> SuccessEnvelope:
    """
    Build a success envelope.

    At least one of `message` / `data` must be supplied. An empty list is
    valid data; only None counts as absent.
    """
    if message is None and data is None:
        raise ValueError("A success response needs a message, data, or both")
    return SuccessEnvelope(message=message, data=data)


def error_body(message: str) -> Dict[str, Any]:
    """JSON body for every non-validation error response."""
    return ErrorEnvelope(message=message).model_dump()


def validation_error_body(message: str) -> Dict[str, Any]:
    """JSON body for a 400 validation failure; `message` already carries the prefix."""
    return ValidationErrorResponse(error=message).model_dump()


# OpenAPI `responses=` fragments shared by every entity route
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"description": "Validation error", "model": ValidationErrorResponse},
    404: {"description": "Record does not exist", "model": ErrorEnvelope},
    503: {"description": "Document store unavailable", "model": ErrorEnvelope},
    504: {"description": "Document store timed out", "model": ErrorEnvelope},
}
