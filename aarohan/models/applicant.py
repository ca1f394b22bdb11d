"""
Pydantic models for applicants and eligibility results
"""
from datetime import date, datetime, timezone
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


ELIGIBLE_QUALIFICATIONS = (
    "class_10", "iti", "diploma", "ba", "bsc", "bcom", "bba", "bca", "b_pharma"
)
ELIGIBLE_EMPLOYMENT_STATUSES = ("unemployed", "part_time", "freelance")
ELIGIBLE_EDUCATION_STATUSES = ("not_enrolled", "part_time_remote")

# Fixed order, one failure message per flag
EXCLUSION_FLAGS = (
    "premium_institute_graduate",
    "advanced_degree_holder",
    "govt_training_enrolled",
    "family_govt_employee",
)

CRITERIA = (
    "age_check",
    "citizenship_check",
    "qualification_check",
    "employment_check",
    "education_check",
    "income_check",
    "exclusion_check",
)


class Applicant(BaseModel):
    """Applicant data collected by the eligibility form"""
    # Basic details
    full_name: Optional[str] = Field(None, description="Applicant's full name")
    email: Optional[str] = Field(None, description="Contact email")
    phone: Optional[str] = Field(None, description="10-digit mobile number")
    date_of_birth: date = Field(..., description="Date of birth, age is derived from it")
    gender: Optional[str] = Field(None, description="male, female or other")
    address: Optional[str] = Field(None, description="Postal address, city first")
    category: Optional[str] = Field(None, description="general, obc, sc or st")
    differently_abled: bool = Field(False)

    # Eligibility criteria
    citizenship_confirmed: bool = Field(False, description="Indian citizenship confirmed")
    qualification: str = Field(..., min_length=1, description="Highest qualification code")
    employment_status: str = Field(..., min_length=1, description="Current employment status")
    education_status: str = Field(..., min_length=1, description="Current education status")
    family_income: float = Field(..., ge=0, description="Annual family income in rupees")

    # Exclusion flags
    premium_institute_graduate: bool = Field(False)
    advanced_degree_holder: bool = Field(False)
    govt_training_enrolled: bool = Field(False)
    family_govt_employee: bool = Field(False)

    # Skills & experience
    skills: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    experience: str = Field("", description="Free-text description of experience")
    bank_account_seeded: bool = Field(False, description="Aadhaar-seeded bank account for stipend")

    # Preferences
    preferred_language: str = Field("english")
    voice_enabled: bool = Field(False)
    remote_preferred: Optional[bool] = Field(None, description="Overrides voice_enabled as remote preference")

    @field_validator('qualification', 'employment_status', 'education_status')
    @classmethod
    def normalize_code(cls, v):
        return v.strip().lower()

    @field_validator('skills', 'languages', 'certifications')
    @classmethod
    def drop_blank_entries(cls, v):
        return [item.strip() for item in v if item and item.strip()]

    @property
    def wants_remote(self) -> bool:
        if self.remote_preferred is not None:
            return self.remote_preferred
        return self.voice_enabled

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "full_name": "Asha Verma",
                "date_of_birth": "2002-05-14",
                "citizenship_confirmed": True,
                "qualification": "bca",
                "employment_status": "unemployed",
                "education_status": "not_enrolled",
                "family_income": 500000,
                "skills": ["HTML", "CSS", "Communication"],
                "languages": ["English", "Hindi"],
                "experience": "Built two websites for local shops and volunteered as a computer tutor.",
                "bank_account_seeded": True
            }
        }
    )


class EligibilityResult(BaseModel):
    """Verdict for the PM Internship Scheme, never mutated after creation"""
    is_eligible: bool = Field(..., description="True only if every criterion passed")
    criteria_results: Dict[str, bool] = Field(..., description="Outcome per criterion")
    failed_criteria: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    eligibility_score: int = Field(..., ge=0, le=100)
    readiness_score: int = Field(..., ge=0, le=100)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "is_eligible": False,
                "criteria_results": {
                    "age_check": True,
                    "citizenship_check": True,
                    "qualification_check": True,
                    "employment_check": True,
                    "education_check": True,
                    "income_check": False,
                    "exclusion_check": True
                },
                "failed_criteria": ["Family income exceeds ₹8,00,000 annually"],
                "recommendations": ["This scheme is designed for families with annual income below ₹8 lakhs"],
                "eligibility_score": 86,
                "readiness_score": 60
            }
        }
    )


class EligibilityRecord(BaseModel):
    """History entry stored for every evaluation of a user"""
    id: Optional[str] = Field(None, description="Document id")
    user_id: str
    result: EligibilityResult
    checked_at: datetime = Field(default_factory=get_current_utc_time)


class EligibilityHistoryResponse(BaseModel):
    user_id: str
    total_checks: int
    history: List[EligibilityRecord] = Field(default_factory=list)
