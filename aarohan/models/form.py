"""
Models for the multi-step application form
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class FormStep(BaseModel):
    title: str
    title_hindi: str
    fields: List[str]


class StepValidation(BaseModel):
    step_index: int
    errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class FormState(BaseModel):
    """Current step, accumulated answers and the latest validation outcome"""
    current_step: int = Field(0, ge=0)
    fields: Dict[str, Any] = Field(default_factory=dict)
    validation: StepValidation = Field(default_factory=lambda: StepValidation(step_index=0))


class StepValidationRequest(BaseModel):
    step_index: int = Field(..., ge=0)
    fields: Dict[str, Any] = Field(default_factory=dict)


class StepValidationResponse(BaseModel):
    step_index: int
    is_valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)
    next_step: int
    progress: float


class SubmitApplicationRequest(BaseModel):
    fields: Dict[str, Any] = Field(default_factory=dict)
    user_id: Optional[str] = Field(None, description="Save the applicant and result for this user")
