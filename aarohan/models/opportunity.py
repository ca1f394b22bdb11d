"""
Pydantic models for internship opportunities and recommendations
"""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict

from .applicant import Applicant, EligibilityResult


OPPORTUNITY_CATEGORIES = (
    "technology", "marketing", "operations", "content", "finance", "healthcare", "other"
)
DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")


class Opportunity(BaseModel):
    """Internship catalog entry, read-only reference data"""
    id: str = Field(..., description="Catalog identifier")
    title: str
    company: str
    description: str = ""
    location: str = ""
    duration_months: Optional[int] = Field(None, ge=1)
    stipend: Optional[int] = Field(None, ge=0, description="Monthly stipend in rupees")
    skills_required: List[str] = Field(default_factory=list)
    category: str = Field("other")
    is_remote: bool = False
    difficulty_level: str = Field("beginner")
    qualifications_accepted: List[str] = Field(default_factory=list)
    languages_supported: List[str] = Field(default_factory=list)

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        v = v.strip().lower()
        if v not in OPPORTUNITY_CATEGORIES:
            raise ValueError(f"category must be one of: {', '.join(OPPORTUNITY_CATEGORIES)}")
        return v

    @field_validator('difficulty_level')
    @classmethod
    def validate_difficulty(cls, v):
        v = v.strip().lower()
        if v not in DIFFICULTY_LEVELS:
            raise ValueError(f"difficulty_level must be one of: {', '.join(DIFFICULTY_LEVELS)}")
        return v

    model_config = ConfigDict(frozen=True)


class Recommendation(BaseModel):
    """Match of one opportunity against an applicant"""
    internship_id: str
    match_score: int = Field(..., ge=0, le=99)
    reason: str = ""
    skill_gaps: List[str] = Field(default_factory=list)
    growth_potential: str = "Good"


class MatchRequest(BaseModel):
    """Request body for recommendation matching"""
    applicant: Applicant
    opportunities: Optional[List[Opportunity]] = Field(
        None, description="Catalog to match against (defaults to the stored catalog)"
    )


class DashboardResponse(BaseModel):
    user_id: str
    name: Optional[str] = None
    skills_count: int = 0
    eligibility: Optional[EligibilityResult] = None
    opportunities: List[Opportunity] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    degraded_sources: List[str] = Field(
        default_factory=list, description="Sources that failed and were replaced by defaults"
    )
