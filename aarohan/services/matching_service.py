"""
Matching service for internship recommendations
"""
import json
import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from ..config import settings
from ..models.applicant import Applicant
from ..models.opportunity import Opportunity, Recommendation
from .llm_service import LLMService, llm_service

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 5
BASE_SCORE = 50
QUALIFICATION_BONUS = 20
ANY_QUALIFICATION_BONUS = 10
SKILL_BONUS = 10
BEGINNER_BONUS = 5
REMOTE_BONUS = 5
# Match scores stay below 100, for the model ranking as well as the heuristic
MATCH_SCORE_CAP = 99
MAX_SKILL_GAPS = 3

# Limits on what is sent to the model
LLM_OPPORTUNITY_LIMIT = 5
LLM_SKILLS_LIMIT = 4
LLM_QUALIFICATIONS_LIMIT = 2
LLM_EXPERIENCE_CHARS = 200

RECOMMENDATION_SCHEMA = {
    "type": "object",
    "properties": {
        "recommendations": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "internship_id": {"type": "string"},
                    "match_score": {"type": "number"},
                    "reason": {"type": "string"}
                },
                "required": ["internship_id", "match_score", "reason"],
                "additionalProperties": False
            }
        }
    },
    "required": ["recommendations"],
    "additionalProperties": False
}


def _city(location: Optional[str]) -> str:
    if not location:
        return "India"
    return location.split(',')[0].strip() or "India"


def growth_potential(opportunity: Opportunity) -> str:
    return "High" if opportunity.category == "technology" else "Good"


def matching_skills(applicant: Applicant, opportunity: Opportunity) -> List[str]:
    """Required skills that overlap an applicant skill by substring in either direction"""
    user_skills = [skill.lower() for skill in applicant.skills]
    return [
        skill for skill in opportunity.skills_required
        if any(user_skill in skill.lower() or skill.lower() in user_skill for user_skill in user_skills)
    ]


def skill_gaps(applicant: Applicant, opportunity: Opportunity) -> List[str]:
    matched = matching_skills(applicant, opportunity)
    gaps = [skill for skill in opportunity.skills_required if skill not in matched]
    return gaps[:MAX_SKILL_GAPS]


class MatchingService:
    """Scores opportunities for an applicant, by LLM when available, heuristically otherwise"""

    def __init__(self, llm: Optional[LLMService] = None, use_llm: Optional[bool] = None):
        self.llm = llm or llm_service
        self.use_llm = settings.recommendations_use_llm if use_llm is None else use_llm

    async def match(
        self,
        applicant: Applicant,
        opportunities: Sequence[Opportunity]
    ) -> List[Recommendation]:
        """
        Recommend up to five opportunities, best first

        Any failure of the model call is logged and answered with the
        heuristic ranking; callers never see an error from this method.
        """
        if not opportunities:
            return []

        if self.use_llm and self.llm.configured:
            try:
                recommendations = await self._match_with_llm(applicant, opportunities)
            except Exception as e:
                logger.warning(f"AI recommendation error, using heuristic matching: {e}")
                recommendations = None

            if recommendations:
                return recommendations
            logger.warning("AI recommendations unavailable, using heuristic matching")

        return self.score_locally(applicant, opportunities)

    def score_locally(
        self,
        applicant: Applicant,
        opportunities: Sequence[Opportunity]
    ) -> List[Recommendation]:
        """Heuristic ranking; ties keep catalog order"""
        scored = [self.score_opportunity(applicant, opportunity) for opportunity in opportunities]
        scored.sort(key=lambda rec: rec.match_score, reverse=True)
        return scored[:MAX_RECOMMENDATIONS]

    @staticmethod
    def score_opportunity(applicant: Applicant, opportunity: Opportunity) -> Recommendation:
        score = BASE_SCORE
        reasons = []

        qualification = (applicant.qualification or "").lower()
        accepted = opportunity.qualifications_accepted
        if qualification and any(q.lower() == qualification for q in accepted):
            score += QUALIFICATION_BONUS
            reasons.append(f"Good fit for your qualification ({applicant.qualification})")
        elif "Any" in accepted:
            score += ANY_QUALIFICATION_BONUS
            reasons.append("Accepts various qualifications")

        matched = matching_skills(applicant, opportunity)
        score += len(matched) * SKILL_BONUS
        if matched:
            reasons.append(f"Skills match: {', '.join(matched[:2])}")

        if opportunity.difficulty_level.lower() == "beginner":
            score += BEGINNER_BONUS
            reasons.append("Beginner-friendly")

        if opportunity.is_remote and applicant.wants_remote:
            score += REMOTE_BONUS
            reasons.append("Matches remote preference")

        if not reasons:
            reasons.append("General opportunity that aligns with common profiles.")

        return Recommendation(
            internship_id=opportunity.id,
            match_score=min(score, MATCH_SCORE_CAP),
            reason="; ".join(reasons),
            skill_gaps=skill_gaps(applicant, opportunity),
            growth_potential=growth_potential(opportunity)
        )

    async def _match_with_llm(
        self,
        applicant: Applicant,
        opportunities: Sequence[Opportunity]
    ) -> Optional[List[Recommendation]]:
        candidates = list(opportunities)[:LLM_OPPORTUNITY_LIMIT]
        prompt = self._build_prompt(applicant, candidates)

        result = await self.llm.generate_json(
            prompt,
            schema=RECOMMENDATION_SCHEMA,
            schema_name="internship_recommendations"
        )
        if not result["success"]:
            logger.warning(f"AI recommendation call failed: {result.get('error')}")
            return None

        return self._parse_llm_recommendations(result["data"], applicant, candidates)

    @staticmethod
    def _build_prompt(applicant: Applicant, candidates: List[Opportunity]) -> str:
        user_profile = {
            "skills": applicant.skills,
            "qualification": applicant.qualification,
            "experience": applicant.experience[:LLM_EXPERIENCE_CHARS] if applicant.experience else "Entry level",
            "languages": applicant.languages,
            "location": _city(applicant.address),
            "preferences": {"remote_ok": applicant.wants_remote, "categories": []}
        }
        limited = [
            {
                "id": opportunity.id,
                "title": opportunity.title,
                "company": opportunity.company,
                "skills_required": opportunity.skills_required[:LLM_SKILLS_LIMIT],
                "category": opportunity.category,
                "difficulty_level": opportunity.difficulty_level,
                "location": _city(opportunity.location),
                "is_remote": opportunity.is_remote,
                "qualifications_accepted": opportunity.qualifications_accepted[:LLM_QUALIFICATIONS_LIMIT]
            }
            for opportunity in candidates
        ]
        return (
            f"Based on this user profile: {json.dumps(user_profile)}, recommend the top 5 most "
            f"suitable internships from this list: {json.dumps(limited)}. Consider skill match, "
            "qualification compatibility, location preference, and career growth potential. "
            "For each, provide internship_id, match_score (0-99, number), and a concise reason (string)."
        )

    @staticmethod
    def _parse_llm_recommendations(
        data: Dict[str, Any],
        applicant: Applicant,
        candidates: List[Opportunity]
    ) -> Optional[List[Recommendation]]:
        items = data.get("recommendations")
        if not isinstance(items, list) or not items:
            logger.warning("Invalid or empty response from AI")
            return None

        by_id = {opportunity.id: opportunity for opportunity in candidates}
        recommendations = []
        seen = set()
        for item in items:
            if not isinstance(item, dict):
                continue
            internship_id = str(item.get("internship_id", ""))
            opportunity = by_id.get(internship_id)
            if opportunity is None or internship_id in seen:
                continue
            try:
                score = float(item.get("match_score"))
            except (TypeError, ValueError):
                continue
            if not math.isfinite(score):
                continue
            seen.add(internship_id)
            recommendations.append(Recommendation(
                internship_id=internship_id,
                match_score=max(0, min(MATCH_SCORE_CAP, int(round(score)))),
                reason=str(item.get("reason") or "").strip(),
                skill_gaps=skill_gaps(applicant, opportunity),
                growth_potential=growth_potential(opportunity)
            ))

        if not recommendations:
            logger.warning("AI response referenced no known internships")
            return None

        recommendations.sort(key=lambda rec: rec.match_score, reverse=True)
        return recommendations[:MAX_RECOMMENDATIONS]


# Global matching service instance
matching_service = MatchingService()
