"""
Eligibility service for the PM Internship Scheme criteria
"""
import logging
import math
from datetime import date, datetime, time, timezone
from typing import Dict, List, Optional, Union

from ..models.applicant import (
    Applicant,
    EligibilityResult,
    CRITERIA,
    EXCLUSION_FLAGS,
    ELIGIBLE_QUALIFICATIONS,
    ELIGIBLE_EMPLOYMENT_STATUSES,
    ELIGIBLE_EDUCATION_STATUSES,
)

logger = logging.getLogger(__name__)

MIN_AGE = 21
MAX_AGE = 24
INCOME_LIMIT = 800000
DAYS_PER_YEAR = 365.25
SECONDS_PER_YEAR = DAYS_PER_YEAR * 24 * 60 * 60

EXCLUSION_MESSAGES = {
    "premium_institute_graduate": "Graduated from premium institute (IIT/IIM/NLU/IISER/NID/IIIT)",
    "advanced_degree_holder": "Holds advanced degree (CA/MBA/Master's)",
    "govt_training_enrolled": "Currently in government skill training program",
    "family_govt_employee": "Family member in permanent government service",
}

# Readiness weights, out of READINESS_TOTAL
READINESS_TOTAL = 5
SKILLS_SATURATION = 3
LANGUAGES_WEIGHT = 0.5
EXPERIENCE_WEIGHT = 1
EXPERIENCE_MIN_CHARS = 50
CERTIFICATIONS_WEIGHT = 0.5
BANK_ACCOUNT_WEIGHT = 1

Moment = Union[date, datetime]


def round_half_up(value: float) -> int:
    """Round .5 upwards, matching the scores shown by the web client"""
    return int(math.floor(value + 0.5))


def _as_utc_datetime(moment: Moment) -> datetime:
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc)
    return datetime.combine(moment, time.min, tzinfo=timezone.utc)


def compute_age(date_of_birth: date, now: Optional[Moment] = None) -> int:
    """
    Age in whole years using 365.25-day years.

    Within a few days of a birthday this can differ from the calendar age;
    that imprecision is kept deliberately so results match existing records.
    """
    current = _as_utc_datetime(now or datetime.now(timezone.utc))
    born = _as_utc_datetime(date_of_birth)
    elapsed = (current - born).total_seconds()
    return int(math.floor(elapsed / SECONDS_PER_YEAR))


class EligibilityService:
    """Evaluates applicants against the PM Internship Scheme criteria"""

    def evaluate(self, applicant: Applicant, now: Optional[Moment] = None) -> EligibilityResult:
        """
        Evaluate an applicant

        Args:
            applicant: Validated applicant record
            now: Reference moment for the age computation (defaults to current UTC time)

        Returns:
            A fresh EligibilityResult
        """
        criteria_results: Dict[str, bool] = {}
        failed_criteria: List[str] = []
        recommendations: List[str] = []

        # Age (21-24 inclusive)
        age = compute_age(applicant.date_of_birth, now)
        criteria_results["age_check"] = MIN_AGE <= age <= MAX_AGE
        if age < MIN_AGE:
            failed_criteria.append("You must be at least 21 years old")
            recommendations.append("Wait until you turn 21 to apply for the PM Internship Scheme")
        elif age > MAX_AGE:
            failed_criteria.append("You must be 24 years or younger")
            recommendations.append("Consider other skill development programs for your age group")

        # Citizenship
        criteria_results["citizenship_check"] = applicant.citizenship_confirmed is True
        if not criteria_results["citizenship_check"]:
            failed_criteria.append("Indian citizenship confirmation required")
            recommendations.append("Please confirm your Indian citizenship to proceed")

        # Qualification
        criteria_results["qualification_check"] = applicant.qualification in ELIGIBLE_QUALIFICATIONS
        if not criteria_results["qualification_check"]:
            failed_criteria.append("Qualification not eligible for the scheme")
            recommendations.append(
                "Complete one of the eligible qualifications: Class 10, ITI, Diploma, BA, B.Sc, "
                "B.Com, BBA, BCA, or B.Pharma"
            )

        # Employment status
        criteria_results["employment_check"] = applicant.employment_status in ELIGIBLE_EMPLOYMENT_STATUSES
        if not criteria_results["employment_check"]:
            failed_criteria.append("Currently employed full-time")
            recommendations.append("You must not be in full-time employment to be eligible")

        # Education status
        criteria_results["education_check"] = applicant.education_status in ELIGIBLE_EDUCATION_STATUSES
        if not criteria_results["education_check"]:
            failed_criteria.append("Currently enrolled in full-time in-person education")
            recommendations.append("Complete your current education or switch to part-time/remote learning")

        # Family income (strictly below the limit)
        criteria_results["income_check"] = applicant.family_income < INCOME_LIMIT
        if not criteria_results["income_check"]:
            failed_criteria.append("Family income exceeds ₹8,00,000 annually")
            recommendations.append("This scheme is designed for families with annual income below ₹8 lakhs")

        # Exclusions
        raised = [EXCLUSION_MESSAGES[flag] for flag in EXCLUSION_FLAGS if getattr(applicant, flag)]
        criteria_results["exclusion_check"] = not raised
        if raised:
            failed_criteria.extend(raised)
            recommendations.append("These exclusion criteria ensure the scheme reaches its intended beneficiaries")

        is_eligible = all(criteria_results[name] for name in CRITERIA)
        passed = sum(1 for name in CRITERIA if criteria_results[name])
        eligibility_score = round_half_up(passed / len(CRITERIA) * 100)
        readiness_score = self.readiness_score(applicant)

        if is_eligible:
            recommendations.extend(self._improvement_recommendations(applicant, readiness_score))

        logger.debug(
            f"Evaluated applicant: eligible={is_eligible} "
            f"eligibility_score={eligibility_score} readiness_score={readiness_score}"
        )

        return EligibilityResult(
            is_eligible=is_eligible,
            criteria_results=criteria_results,
            failed_criteria=failed_criteria,
            recommendations=recommendations,
            eligibility_score=eligibility_score,
            readiness_score=readiness_score
        )

    @staticmethod
    def readiness_score(applicant: Applicant) -> int:
        """Heuristic 0-100 measure of application strength"""
        factors = 0.0

        if applicant.skills:
            factors += min(len(applicant.skills) / SKILLS_SATURATION, 1)
        if len(applicant.languages) > 1:
            factors += LANGUAGES_WEIGHT
        if applicant.experience and len(applicant.experience.strip()) > EXPERIENCE_MIN_CHARS:
            factors += EXPERIENCE_WEIGHT
        if applicant.certifications:
            factors += CERTIFICATIONS_WEIGHT
        if applicant.bank_account_seeded:
            factors += BANK_ACCOUNT_WEIGHT

        return round_half_up(factors / READINESS_TOTAL * 100)

    @staticmethod
    def _improvement_recommendations(applicant: Applicant, readiness_score: int) -> List[str]:
        suggestions = []
        if readiness_score < 50:
            suggestions.append("Consider building more relevant skills before applying")
            suggestions.append("Complete some online certifications in your field of interest")
        if not applicant.bank_account_seeded:
            suggestions.append("Ensure you have a seeded bank account for stipend payments")
        if len(applicant.skills) < 3:
            suggestions.append("Add more skills to your profile to improve internship matching")
        return suggestions


# Global eligibility service instance
eligibility_service = EligibilityService()


def evaluate(applicant: Applicant, now: Optional[Moment] = None) -> EligibilityResult:
    """Module-level shortcut for eligibility_service.evaluate"""
    return eligibility_service.evaluate(applicant, now)
