"""Operational endpoints: liveness, readiness, service info, metrics, and the RPC ping."""

import logging

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST

from ..core.config import Settings
from ..core.dependencies import AppSettings, CurrentClock
from ..core.observability import SERVICE_NAME, SERVICE_VERSION, get_prometheus_metrics
from ..schemas.health import (
    HealthResponse,
    HealthStatus,
    PingResponse,
    ReadinessResponse,
    ServiceInfo,
    TariffInfo,
)
from ..services.temporal import Clock

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health Check")
async def health_check(app_settings: Settings = AppSettings) -> HealthResponse:
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        environment=app_settings.environment,
        debug=app_settings.debug,
    )


@router.get("/ready", response_model=ReadinessResponse, summary="Readiness Check")
async def readiness_check(app_settings: Settings = AppSettings) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Nothing upstream is contacted, so the service is ready as soon as its
    configuration has loaded; the check reports what it loaded.
    """
    return ReadinessResponse(
        status=HealthStatus.READY,
        service=SERVICE_NAME,
        checks={
            "configuration": "ok",
            "timezone": app_settings.timezone,
            "currency": app_settings.currency,
        },
    )


@router.get("/info", response_model=ServiceInfo, tags=["info"], summary="Service Information")
async def service_info(app_settings: Settings = AppSettings) -> ServiceInfo:
    docs = "/docs" if app_settings.debug else None
    return ServiceInfo(
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        description="Booking record reconciliation and route-based valuation",
        environment=app_settings.environment,
        timezone=app_settings.timezone,
        revenue_window_months=app_settings.revenue_window_months,
        tariff=TariffInfo(
            rate_per_km=app_settings.tariff_rate_per_km,
            currency=app_settings.currency,
            earth_radius_km=app_settings.earth_radius_km,
        ),
        endpoints={
            "health": "/health",
            "readiness": "/ready",
            "metrics": "/metrics",
            "docs": docs,
        },
    )


@router.get("/metrics", response_class=Response, tags=["observability"], summary="Prometheus Metrics")
async def metrics() -> Response:
    """Request, passthrough, fallback, and valuation-tier counters in text exposition format."""
    return Response(content=get_prometheus_metrics(), media_type=CONTENT_TYPE_LATEST)


@router.post("/v1/health/ping", response_model=PingResponse)
async def health_ping(
    clock: Clock = CurrentClock,
    app_settings: Settings = AppSettings,
) -> PingResponse:
    """Report status together with the service clock's current instant."""
    response = PingResponse(
        status=HealthStatus.HEALTHY,
        timestamp=clock(),
        version=SERVICE_VERSION,
        timezone=app_settings.timezone,
    )
    logger.debug("Health ping", extra={"clock": response.timestamp.isoformat()})
    return response
