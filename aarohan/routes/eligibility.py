"""
API routes for eligibility checking
"""
import logging
from fastapi import APIRouter, HTTPException

from ..models.applicant import (
    Applicant,
    EligibilityResult,
    EligibilityRecord,
    EligibilityHistoryResponse
)
from ..services.eligibility_service import eligibility_service
from ..services.mongo_service import mongo_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


@router.post("/evaluate", response_model=EligibilityResult)
async def evaluate_eligibility(applicant: Applicant):
    """
    Evaluate an applicant against the PM Internship Scheme criteria
    """
    return eligibility_service.evaluate(applicant)


@router.post("/user/{user_id}/evaluate", response_model=EligibilityRecord)
async def evaluate_user(user_id: str):
    """
    Evaluate the applicant data saved for a user and append it to their history
    """
    try:
        user = await mongo_service.get_user(user_id)
        if not user:
            raise HTTPException(status_code=404, detail=f"User not found: {user_id}")

        if not user.get("applicant"):
            raise HTTPException(
                status_code=400,
                detail="No eligibility data saved for this user"
            )

        applicant = Applicant(**user["applicant"])
        result = eligibility_service.evaluate(applicant)
        return await mongo_service.store_eligibility_result(user_id, result)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error evaluating user {user_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to check eligibility: {str(e)}"
        )


@router.get("/user/{user_id}/history", response_model=EligibilityHistoryResponse)
async def get_user_eligibility_history(user_id: str):
    """
    Get user's eligibility check history, newest first
    """
    try:
        history = await mongo_service.get_user_eligibility_history(user_id)
        return EligibilityHistoryResponse(
            user_id=user_id,
            total_checks=len(history),
            history=history
        )

    except Exception as e:
        logger.error(f"Error fetching eligibility history for {user_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to retrieve eligibility history: {str(e)}"
        )
