"""
API routes for user profiles and the career assistant
"""
import logging
from typing import List
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse

from ..models.applicant import Applicant
from ..models.user import (
    UserProfileCreate,
    UserProfile,
    RegisterResponse,
    ConversationOverview,
    StartConversationResponse,
    PostMessageRequest,
    PostMessageResponse,
    EndConversationRequest,
    EndConversationResponse,
    CareerAdviceRequest,
    CareerAdviceResponse
)
from ..services.errors import AssistantError, DuplicateUserError, InputValidationError, NotFoundError
from ..services.profile_service import profile_service
from ..services.conversation_service import conversation_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.get("/profile", response_model=UserProfile)
async def get_profile(user_id: str = Query(..., description="User identifier")):
    """
    Get a user's profile
    """
    try:
        return await profile_service.get_profile(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching profile {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/profile", status_code=201, response_model=RegisterResponse)
async def post_profile(profile: UserProfileCreate):
    """
    Register a user and generate their AI profile summary
    """
    try:
        user_id = await profile_service.register(profile)
        return RegisterResponse(message="User registered successfully", success=True, user_id=user_id)
    except InputValidationError as e:
        return JSONResponse(status_code=400, content={"messages": e.messages, "success": False})
    except DuplicateUserError:
        return JSONResponse(status_code=400, content={"message": "user already exists", "success": False})
    except Exception as e:
        logger.error(f"Error registering user: {e}")
        return JSONResponse(
            status_code=500,
            content={"message": "User not registered successfully", "success": False}
        )


@router.put("/profile/{user_id}/applicant", response_model=UserProfile)
async def save_applicant(user_id: str, applicant: Applicant):
    """
    Save eligibility form data for a user
    """
    try:
        return await profile_service.save_applicant(user_id, applicant)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error saving applicant data for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/start-conversation", response_model=StartConversationResponse)
async def start_conversation(user_id: str = Query(..., description="User identifier")):
    """
    Start a new assistant conversation
    """
    try:
        conversation_id = await conversation_service.start_conversation(user_id)
        return StartConversationResponse(conversation_id=conversation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error starting conversation for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Could not start a conversation")


@router.post("/post-message", response_model=PostMessageResponse)
async def post_message(request: PostMessageRequest):
    """
    Send a message to the assistant and get its reply
    """
    try:
        reply = await conversation_service.post_message(request.conversation_id, request.message)
        return PostMessageResponse(reply=reply)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail="; ".join(e.messages))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AssistantError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Error posting message to {request.conversation_id}: {e}")
        raise HTTPException(status_code=500, detail="Something went wrong. Please try again.")


@router.post("/end-conversation", response_model=EndConversationResponse)
async def end_conversation(request: EndConversationRequest):
    """
    End a conversation, returning its title and summary
    """
    try:
        outcome = await conversation_service.end_conversation(request.conversation_id)
        return EndConversationResponse(**outcome)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AssistantError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Error ending conversation {request.conversation_id}: {e}")
        raise HTTPException(status_code=500, detail="Something went wrong. Please try again.")


@router.get("/conversations", response_model=List[ConversationOverview])
async def get_conversations(user_id: str = Query(..., description="User identifier")):
    """
    List a user's conversations, most recent first
    """
    try:
        return await conversation_service.list_conversations(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error listing conversations for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/get-advice", response_model=CareerAdviceResponse)
async def get_advice(request: CareerAdviceRequest):
    """
    Suggest three career paths for a free-text profile
    """
    try:
        advice = await conversation_service.get_career_advice(request.profile_text)
        return CareerAdviceResponse(advice=advice)
    except InputValidationError:
        raise HTTPException(status_code=400, detail="profile_text is required")
    except Exception as e:
        logger.error(f"Error generating career advice: {e}")
        raise HTTPException(status_code=500, detail="Something went wrong with the AI service.")
