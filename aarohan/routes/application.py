"""
API routes for the multi-step eligibility form
"""
import logging
from typing import List
from fastapi import APIRouter, HTTPException

from ..models.applicant import EligibilityResult
from ..models.form import (
    FormState,
    FormStep,
    StepValidationRequest,
    StepValidationResponse,
    SubmitApplicationRequest
)
from ..services.application_form import application_form
from ..services.eligibility_service import eligibility_service
from ..services.errors import InputValidationError
from ..services.mongo_service import mongo_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/application", tags=["application"])


@router.get("/steps", response_model=List[FormStep])
async def get_steps():
    """
    Form steps and the fields each one collects
    """
    return application_form.steps


@router.post("/validate-step", response_model=StepValidationResponse)
async def validate_step(request: StepValidationRequest):
    """
    Validate one step and report which step the form moves to
    """
    if request.step_index > application_form.last_step:
        raise HTTPException(status_code=400, detail=f"Unknown step: {request.step_index}")

    state = FormState(current_step=request.step_index, fields=request.fields)
    moved = application_form.next_step(state)
    return StepValidationResponse(
        step_index=request.step_index,
        is_valid=moved.validation.is_valid,
        errors=moved.validation.errors,
        next_step=moved.current_step,
        progress=application_form.progress(moved)
    )


@router.post("/submit", response_model=EligibilityResult)
async def submit_application(request: SubmitApplicationRequest):
    """
    Validate the whole form and evaluate eligibility, optionally saving both for a user
    """
    try:
        applicant = application_form.to_applicant(application_form.new_state(request.fields))
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=e.messages)

    result = eligibility_service.evaluate(applicant)

    if request.user_id:
        try:
            if not await mongo_service.save_applicant(request.user_id, applicant):
                raise HTTPException(status_code=404, detail=f"User not found: {request.user_id}")
            await mongo_service.store_eligibility_result(request.user_id, result)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving application for {request.user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save application")

    return result
