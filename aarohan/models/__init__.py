"""
Models package for the AAROHAN eligibility service
"""

from .applicant import (
    Applicant,
    EligibilityResult,
    EligibilityRecord,
    EligibilityHistoryResponse,
    CRITERIA,
    EXCLUSION_FLAGS
)

from .opportunity import (
    Opportunity,
    Recommendation,
    MatchRequest,
    DashboardResponse
)

from .user import (
    UserProfileCreate,
    UserProfile,
    ChatMessage,
    Conversation,
    ConversationOverview
)

from .form import (
    FormStep,
    FormState,
    StepValidation
)

__all__ = [
    # Applicant models
    "Applicant",
    "EligibilityResult",
    "EligibilityRecord",
    "EligibilityHistoryResponse",
    "CRITERIA",
    "EXCLUSION_FLAGS",

    # Opportunity models
    "Opportunity",
    "Recommendation",
    "MatchRequest",
    "DashboardResponse",

    # User models
    "UserProfileCreate",
    "UserProfile",
    "ChatMessage",
    "Conversation",
    "ConversationOverview",

    # Form models
    "FormStep",
    "FormState",
    "StepValidation"
]
