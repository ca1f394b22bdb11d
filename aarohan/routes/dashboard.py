"""
API route for the personalised dashboard
"""
import logging
from fastapi import APIRouter, HTTPException

from ..models.opportunity import DashboardResponse
from ..services.dashboard_service import dashboard_service
from ..services.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/{user_id}", response_model=DashboardResponse)
async def get_dashboard(user_id: str):
    """
    Eligibility, catalog and recommendations for a user
    """
    try:
        return await dashboard_service.build_dashboard(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error building dashboard for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
