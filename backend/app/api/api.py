"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from app.api.v1 import analytics, auth, catalog, external, hr, insights

api_router = APIRouter()

# Include all v1 routers with their prefixes and tags
api_router.include_router(
    auth.router,
    tags=["Authentication"],
)

api_router.include_router(
    catalog.router,
    tags=["Catalog"],
)

api_router.include_router(
    insights.router,
    prefix="/insights",
    tags=["Insights"],
)

api_router.include_router(
    hr.router,
    prefix="/hr",
    tags=["HR"],
)

api_router.include_router(
    external.router,
    tags=["External Data"],
)

api_router.include_router(
    analytics.router,
    tags=["Analytics"],
)
