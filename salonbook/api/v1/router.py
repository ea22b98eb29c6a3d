"""
API v1 router setup
Organized into: public (customer booking flow) and dashboard (owner workflow) routes
"""
from fastapi import APIRouter

from salonbook.api.v1.public import availability, bookings
from salonbook.api.v1.dashboard import schedule, bookings as dashboard_bookings

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES
# ============================================================================
api_v1_router.include_router(availability.router)
api_v1_router.include_router(bookings.router)

# ============================================================================
# DASHBOARD ROUTES (owner authentication happens upstream)
# ============================================================================
api_v1_router.include_router(
    schedule.router,
    prefix="/dashboard",
)
api_v1_router.include_router(
    dashboard_bookings.router,
    prefix="/dashboard",
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "sections": {
            "public": "Availability, booking submission and cancellation",
            "dashboard": "Schedule configuration and booking status management",
        }
    }
