"""Schemas for the operational endpoints."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    READY = "ready"


class HealthResponse(BaseModel):
    """Liveness report."""

    status: HealthStatus
    service: str
    version: str
    environment: str
    debug: bool


class ReadinessResponse(BaseModel):
    """Readiness report with the configuration requests will be served with."""

    status: HealthStatus
    service: str
    checks: dict[str, str]


class TariffInfo(BaseModel):
    rate_per_km: float
    currency: str
    earth_radius_km: float


class ServiceInfo(BaseModel):
    """Service description returned by /info."""

    service: str
    version: str
    description: str
    environment: str
    timezone: str
    revenue_window_months: int
    tariff: TariffInfo
    endpoints: dict[str, Optional[str]]


class PingResponse(BaseModel):
    """RPC-style health ping response."""

    status: HealthStatus = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current instant from the service clock (ISO 8601)")
    version: str = Field(..., description="API version")
    timezone: str = Field(..., description="Timezone used for pickup date/time fields")
