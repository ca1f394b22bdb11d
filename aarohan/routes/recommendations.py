"""
API routes for internship recommendations
"""
import logging
from typing import List
from fastapi import APIRouter, HTTPException

from ..data.opportunities import SAMPLE_OPPORTUNITIES
from ..models.opportunity import MatchRequest, Opportunity, Recommendation
from ..services.matching_service import matching_service
from ..services.mongo_service import mongo_service
from ..utils.fetch import fetch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


async def load_catalog() -> List[Opportunity]:
    """Stored catalog, or the built-in sample catalog when it is empty or unreachable"""
    catalog = await fetch("opportunities", mongo_service.list_opportunities)
    return catalog.unwrap_or([]) or list(SAMPLE_OPPORTUNITIES)


@router.post("/match", response_model=List[Recommendation])
async def match_opportunities(request: MatchRequest):
    """
    Recommend up to five opportunities for an applicant
    """
    try:
        opportunities = request.opportunities
        if opportunities is None:
            opportunities = await load_catalog()
        return await matching_service.match(request.applicant, opportunities)

    except Exception as e:
        logger.error(f"Error matching opportunities: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/opportunities", response_model=List[Opportunity])
async def list_opportunities():
    """
    List the opportunity catalog
    """
    return await load_catalog()
