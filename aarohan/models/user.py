"""
Pydantic models for user profiles and assistant conversations
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, ConfigDict

from .applicant import Applicant, get_current_utc_time


class UserProfileCreate(BaseModel):
    """Registration payload, checked field by field by the profile service"""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    career_goals: Optional[str] = Field(None, alias="careerGoals")
    experience: Optional[str] = None
    education: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Asha Verma",
                "email": "asha@example.com",
                "password": "change-me",
                "skills": ["HTML", "CSS"],
                "careerGoals": "Front-end developer",
                "experience": "Freelance websites for local shops",
                "education": "BCA"
            }
        }
    )


class UserProfile(BaseModel):
    """Stored user as returned to clients (password hash never included)"""
    id: str
    name: str
    email: str
    skills: List[str] = Field(default_factory=list)
    career_goals: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    user_profile_summary: Optional[str] = None
    master_summary: Optional[str] = None
    ai_career_analysis: Optional[str] = None
    onboarded: bool = False
    applicant: Optional[Applicant] = None
    created_at: datetime = Field(default_factory=get_current_utc_time)
    updated_at: datetime = Field(default_factory=get_current_utc_time)


class RegisterResponse(BaseModel):
    message: str
    success: bool
    user_id: Optional[str] = None


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    content: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=get_current_utc_time)


class Conversation(BaseModel):
    id: str
    user_id: str
    history: List[ChatMessage] = Field(default_factory=list)
    summary: Optional[str] = None
    summarized_count: int = Field(0, description="Messages already folded into the summary")
    title: str = "New Conversation"
    topic: Optional[str] = None
    created_at: datetime = Field(default_factory=get_current_utc_time)
    updated_at: datetime = Field(default_factory=get_current_utc_time)


class ConversationOverview(BaseModel):
    """Conversation listing entry without the full transcript"""
    id: str
    title: str
    summary: Optional[str] = None
    topic: Optional[str] = None
    message_count: int = 0
    created_at: datetime
    updated_at: datetime


class StartConversationResponse(BaseModel):
    conversation_id: str = Field(..., alias="conversationId")

    model_config = ConfigDict(populate_by_name=True)


class PostMessageRequest(BaseModel):
    conversation_id: str = Field(..., alias="conversationId")
    message: str = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class PostMessageResponse(BaseModel):
    reply: str


class EndConversationRequest(BaseModel):
    conversation_id: str = Field(..., alias="conversationId")

    model_config = ConfigDict(populate_by_name=True)


class EndConversationResponse(BaseModel):
    title: str
    summary: str


class CareerAdviceRequest(BaseModel):
    profile_text: Optional[str] = None


class CareerAdviceResponse(BaseModel):
    advice: str
