"""Liveness and readiness payloads."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str | None = None


class ReadinessResponse(BaseModel):
    status: str = "ready"


class ReadinessErrorResponse(BaseModel):
    status: str = "not_ready"
    message: str
