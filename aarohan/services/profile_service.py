"""
Profile service for registration and stored applicant data
"""
import json
import logging
from typing import Any, Dict, Optional

from ..models.applicant import Applicant
from ..models.user import UserProfile, UserProfileCreate
from ..utils.security import hash_password
from ..utils.validators import validate_registration_data
from .errors import AssistantError, DuplicateUserError, NotFoundError, InputValidationError
from .llm_service import LLMService, llm_service
from .mongo_service import MongoService, mongo_service

logger = logging.getLogger(__name__)


class ProfileService:
    """Registers users and keeps their profile data"""

    SUMMARY_PROMPT_TEMPLATE = """You are a professional career analyst. Your task is to analyze the following JSON object, which contains
a user's profile data. Based on this data, write a concise, one-paragraph summary of the user's professional profile.
The summary should be insightful and encouraging, highlighting their key strengths and potential career direction.
**User Profile Data:**
{profile_json}"""

    def __init__(self, store: Optional[MongoService] = None, llm: Optional[LLMService] = None):
        self.store = store or mongo_service
        self.llm = llm or llm_service

    async def register(self, data: UserProfileCreate) -> str:
        """
        Register a new user

        Args:
            data: Registration payload

        Returns:
            Id of the created user

        Raises:
            InputValidationError: required fields missing or invalid
            DuplicateUserError: email already registered
            AssistantError: profile summary could not be generated
        """
        payload = data.model_dump()
        errors = validate_registration_data(payload)
        if errors:
            raise InputValidationError(errors)

        email = data.email.strip().lower()
        if await self.store.get_user_by_email(email):
            raise DuplicateUserError("user already exists")

        public_fields = {
            "name": data.name.strip(),
            "email": email,
            "skills": [skill.strip() for skill in data.skills if skill and skill.strip()],
            "career_goals": data.career_goals,
            "experience": data.experience,
            "education": data.education
        }

        prompt = self.SUMMARY_PROMPT_TEMPLATE.format(profile_json=json.dumps(public_fields, indent=2))
        result = await self.llm.generate_text(prompt)
        if not result["success"]:
            logger.error(f"Profile summary generation failed for {email}: {result.get('error')}")
            raise AssistantError("User not registered successfully", detail=result.get("error"))

        user_id = await self.store.create_user({
            **public_fields,
            "password_hash": hash_password(data.password),
            "user_profile_summary": result["content"],
            "master_summary": None,
            "ai_career_analysis": None,
            "onboarded": False
        })
        logger.info(f"User registered: {user_id}")
        return user_id

    async def get_profile(self, user_id: str) -> UserProfile:
        user = await self.store.get_user(user_id)
        if not user:
            raise NotFoundError(f"User not found: {user_id}")
        return self.to_profile(user)

    async def save_applicant(self, user_id: str, applicant: Applicant) -> UserProfile:
        """Attach eligibility form data to a user"""
        if not await self.store.save_applicant(user_id, applicant):
            raise NotFoundError(f"User not found: {user_id}")
        return await self.get_profile(user_id)

    @staticmethod
    def to_profile(user: Dict[str, Any]) -> UserProfile:
        fields = {key: value for key, value in user.items() if key != "password_hash"}
        return UserProfile(**fields)


# Global profile service instance
profile_service = ProfileService()
