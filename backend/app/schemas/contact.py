"""
ContactBook Backend — Pydantic Response Schemas
=================================================

What:  Pydantic models for the fixed-shape responses of the API.
Why:   OpenAPI docs and response validation for everything that is NOT a contact.
How:   Contact documents themselves are open (any JSON object), so routes
       describe them as Dict[str, Any]; only envelopes get a model here.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

# A contact as it travels over the wire: {"_id": "...", ...arbitrary fields}
ContactDocument = Dict[str, Any]


class MessageResponse(BaseModel):
    """
    What:  Plain acknowledgement body.
    Who:   Returned by GET / and DELETE /contact/{contact_id}.
    """
    message: str = Field(description="Human-readable status message")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Contact body must be a JSON object",
            "details": {"field": "body"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and document-store status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Document store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
