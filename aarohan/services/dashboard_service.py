"""
Dashboard service combining profile, eligibility and recommendations
"""
import logging
from typing import Optional

from ..data.opportunities import SAMPLE_OPPORTUNITIES
from ..models.applicant import Applicant
from ..models.opportunity import DashboardResponse
from ..utils.fetch import fetch
from .eligibility_service import EligibilityService, eligibility_service
from .errors import NotFoundError
from .matching_service import MatchingService, matching_service
from .mongo_service import MongoService, mongo_service

logger = logging.getLogger(__name__)


class DashboardService:
    """Builds the personalised dashboard for a user"""

    def __init__(
        self,
        store: Optional[MongoService] = None,
        matcher: Optional[MatchingService] = None,
        evaluator: Optional[EligibilityService] = None
    ):
        self.store = store or mongo_service
        self.matcher = matcher or matching_service
        self.evaluator = evaluator or eligibility_service

    async def build_dashboard(self, user_id: str) -> DashboardResponse:
        """
        Assemble the dashboard

        Each source is fetched into a FetchResult; failed sources are replaced
        by an explicit default and listed in ``degraded_sources``.
        """
        degraded = []

        profile = await fetch("profile", lambda: self.store.get_user(user_id))
        if profile.ok and profile.value is None:
            raise NotFoundError(f"User not found: {user_id}")
        if not profile.ok:
            degraded.append("profile")
        user = profile.unwrap_or({})

        catalog = await fetch("opportunities", self.store.list_opportunities)
        if not catalog.ok:
            degraded.append("opportunities")
        opportunities = catalog.unwrap_or([]) or list(SAMPLE_OPPORTUNITIES)

        applicant = Applicant(**user["applicant"]) if user.get("applicant") else None

        if applicant is not None:
            eligibility = self.evaluator.evaluate(applicant)
        else:
            latest = await fetch("eligibility", lambda: self.store.get_latest_eligibility(user_id))
            if not latest.ok:
                degraded.append("eligibility")
            record = latest.unwrap_or(None)
            eligibility = record.result if record else None

        recommendations = await self.matcher.match(applicant, opportunities) if applicant else []

        if degraded:
            logger.warning(f"Dashboard for {user_id} built with defaults for: {', '.join(degraded)}")

        return DashboardResponse(
            user_id=user_id,
            name=user.get("name"),
            skills_count=len(user.get("skills") or []),
            eligibility=eligibility,
            opportunities=opportunities,
            recommendations=recommendations,
            degraded_sources=degraded
        )


# Global dashboard service instance
dashboard_service = DashboardService()
