"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from dealer_inventory.api.v1.dependencies (no manual
repo/service construction).
"""

from fastapi import APIRouter

from dealer_inventory.api.v1.endpoints import health, marketing, sale_records, vehicles

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(sale_records.router, prefix="/sale-records", tags=["sale-records"])
api_router.include_router(marketing.router, prefix="/marketing", tags=["marketing"])
