"""
Happy Thoughts API - Shared Response Schemas
==============================================

What:  The response envelope every endpoint returns, plus small shared models.

Envelope shape:
    {
        "success": true,
        "response": <payload | null | error details>,
        "message": "Human-readable summary"
    }
"""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for payloads serialized with camelCase keys (createdAt, userId)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(BaseModel, Generic[T]):
    """Success/response/message wrapper applied to every API response."""

    success: bool = Field(default=True, description="Whether the request succeeded")
    response: Optional[T] = Field(default=None, description="Payload or error details")
    message: str = Field(default="", description="Human-readable summary")


class ErrorEnvelope(BaseModel):
    """Envelope returned by the global exception handlers."""

    success: bool = Field(default=False)
    response: Optional[Any] = Field(default=None, description="Error details, if any")
    message: str = Field(description="Human-readable error description")


class EndpointInfo(BaseModel):
    path: str
    methods: List[str]


class SecretPayload(BaseModel):
    secret: str


class HealthResponse(BaseModel):
    """
    Health check response.

    status:   healthy | unhealthy
    database: connected | disconnected
    """
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity")
    uptime_seconds: float = Field(description="Seconds since service started")
