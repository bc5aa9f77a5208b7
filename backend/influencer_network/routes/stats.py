"""Dashboard statistics: /api/stats."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.routes.deps import PROTECTED
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse
from influencer_network.schemas.stats import DashboardData
from influencer_network.services.stats_service import stats_service

router = APIRouter(
    prefix="/api/stats",
    tags=["Stats"],
    dependencies=PROTECTED,
    responses=COMMON_ERROR_RESPONSES,
)


@router.get("/dashboard", response_model=ApiResponse[DashboardData], summary="Headline dashboard counters")
async def dashboard(db: AsyncSession = Depends(get_db_session)) -> ApiResponse[DashboardData]:
    stats = await stats_service.dashboard(db)
    return ApiResponse[DashboardData](message="Dashboard statistics retrieved successfully", data=DashboardData(stats=stats))
