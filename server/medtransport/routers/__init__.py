"""FastAPI routers package."""

from .booking import router as booking_router
from .health import router as health_router
from .hospital import router as hospital_router
from .valuation import router as valuation_router

__all__ = [
    "booking_router",
    "health_router",
    "hospital_router",
    "valuation_router",
]
