"""
Services package for the AAROHAN eligibility service
"""

from .mongo_service import MongoService
from .llm_service import LLMService
from .eligibility_service import EligibilityService
from .matching_service import MatchingService
from .profile_service import ProfileService
from .conversation_service import ConversationService
from .application_form import ApplicationForm
from .dashboard_service import DashboardService

__all__ = [
    "MongoService",
    "LLMService",
    "EligibilityService",
    "MatchingService",
    "ProfileService",
    "ConversationService",
    "ApplicationForm",
    "DashboardService"
]
