"""API endpoints for dashboard data"""
import logging

from fastapi import APIRouter, HTTPException

from src.aggregation.engine import DashboardAggregator
from src.common.exceptions import InputShapeError
from src.common.schemas import DashboardRequest, DashboardResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])

aggregator = DashboardAggregator()


@router.post(
    "/generate",
    response_model=DashboardResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed submissions"},
        500: {"model": ErrorResponse, "description": "Aggregation failed"},
    },
)
async def generate_dashboard_data(request: DashboardRequest):
    """
    Build dashboard data (completion rate, frequency charts) for a batch

    Args:
        request: Raw submissions and research objectives

    Returns:
        Dashboard summary with one bar chart per answered field
    """
    try:
        dashboard = aggregator.aggregate(request.raw_data, request.objectives)
    except InputShapeError as e:
        logger.warning(f"Rejected dashboard request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Error generating dashboard data: {e}")
        raise HTTPException(status_code=500, detail=f"Dashboard error: {str(e)}")

    return DashboardResponse(data=dashboard)
