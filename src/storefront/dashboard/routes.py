"""FastAPI route for the back-office dashboard."""

from dataclasses import asdict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from storefront.api.deps import admin_user_id
from storefront.dashboard.stats import dashboard_stats

dashboard_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(admin_user_id)])


class StatsResponse(BaseModel):
    total_products: int
    total_categories: int
    total_users: int
    total_orders: int
    total_revenue: float
    pending_orders: int


@dashboard_router.get("/stats", response_model=StatsResponse)
async def stats() -> StatsResponse:
    return StatsResponse(**asdict(dashboard_stats()))
