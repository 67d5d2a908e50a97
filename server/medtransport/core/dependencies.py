"""FastAPI dependencies for configuration, clock, and timezone.

Handlers never read the wall clock or global settings directly; they take
them from these dependencies so tests can override them through
``app.dependency_overrides``.
"""

from datetime import tzinfo

from fastapi import Depends

from ..services.temporal import Clock, utc_now
from ..services.valuation import ValuationService
from ..schemas.hospital import Hospital
from .config import Settings, settings


def get_settings() -> Settings:
    """
    Settings dependency.

    Returns:
        Settings: The process-wide settings instance
    """
    return settings


def get_clock() -> Clock:
    """
    Clock dependency.

    Returns:
        Clock: Callable returning the current aware instant
    """
    return utc_now


def get_timezone(app_settings: Settings = Depends(get_settings)) -> tzinfo:
    """Timezone that upstream pickup date/time fields are expressed in."""
    return app_settings.tzinfo


def build_valuation_service(
    hospitals: list[Hospital],
    app_settings: Settings,
    clock: Clock,
    tz: tzinfo,
) -> ValuationService:
    """Bind a hospital snapshot to the configured tariff, clock, and timezone."""
    return ValuationService(
        hospitals,
        rate=app_settings.tariff_rate_per_km,
        radius_km=app_settings.earth_radius_km,
        clock=clock,
        tz=tz,
    )


AppSettings = Depends(get_settings)
CurrentClock = Depends(get_clock)
PickupTimezone = Depends(get_timezone)
