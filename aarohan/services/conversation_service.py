"""
Conversation service for the career-advice assistant
"""
import logging
from typing import Dict, List, Optional

from ..config import settings
from ..models.user import ChatMessage, ConversationOverview
from ..utils.validators import extract_text_snippet
from .errors import AssistantError, NotFoundError, InputValidationError
from .llm_service import LLMService, llm_service
from .mongo_service import MongoService, mongo_service

logger = logging.getLogger(__name__)

EMPTY_HISTORY_SUMMARY = "No conversation history to summarize."
SUMMARY_FAILED = "Could not generate a summary for this conversation."
GENERIC_REPLY_ERROR = "The assistant could not respond right now. Please try again."

END_CONVERSATION_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "summary": {"type": "string"},
        "updatedMasterSummary": {"type": "string"},
        "aiCareerAnalysis": {"type": "string"}
    },
    "required": ["title", "summary", "updatedMasterSummary", "aiCareerAnalysis"],
    "additionalProperties": False
}


def format_transcript(history: List[ChatMessage]) -> str:
    return "\n\n".join(f"{message.role}: {message.content}" for message in history)


class ConversationService:
    """Prompt templating around the LLM plus per-user conversation logs"""

    SYSTEM_PROMPT = """You are AAROHAN, a friendly career mentor for young people in India
preparing for the PM Internship Scheme. Give practical, encouraging and concise advice."""

    ONBOARDING_PROMPT_TEMPLATE = """This is the first conversation with this user. Introduce yourself briefly,
reflect back what you understand about them, and ask one question about their career goals.

**User Profile Summary:**
{profile_summary}

**Skills:** {skills}
**Career Goals:** {career_goals}

**User Message:**
{message}"""

    CONTINUATION_PROMPT_TEMPLATE = """Continue the mentoring conversation with this user.

**What you know about the user so far:**
{master_summary}

**Summary of this conversation so far:**
{conversation_summary}

**Most recent messages:**
{recent_turns}

**User Message:**
{message}"""

    HISTORY_SUMMARY_PROMPT_TEMPLATE = """Based on the following conversation transcript, please write a concise, one-paragraph
summary of the key topics discussed and the main advice given. The summary should be easy to understand for
someone reviewing this chat later.
{previous_summary}
**Transcript:**
{transcript}"""

    END_CONVERSATION_PROMPT_TEMPLATE = """The following mentoring conversation has ended. Produce a JSON object with:
- "title": a short title (at most 8 words) for the conversation
- "summary": a one-paragraph summary of the topics discussed and advice given
- "updatedMasterSummary": the long-lived summary of the user, updated with anything new learned here
- "aiCareerAnalysis": a short analysis of the user's career direction, strengths and skill gaps

**Current long-lived summary of the user:**
{master_summary}

**Transcript:**
{transcript}"""

    CAREER_ADVICE_PROMPT_TEMPLATE = """You are an expert career advisor for students in India.
Analyze the following user profile and generate 3 suitable career paths.
For each path, list the required skills and identify any skill gaps.

User Profile:
{profile_text}"""

    def __init__(self, store: Optional[MongoService] = None, llm: Optional[LLMService] = None):
        self.store = store or mongo_service
        self.llm = llm or llm_service

    async def start_conversation(self, user_id: str) -> str:
        """Create an empty conversation for a user and return its id"""
        if not await self.store.get_user(user_id):
            raise NotFoundError(f"User not found: {user_id}")
        conversation = await self.store.create_conversation(user_id)
        return conversation.id

    async def post_message(self, conversation_id: str, message: str) -> str:
        """
        Append a user message, ask the model for a reply and store it

        The user message is persisted before the model is called; when the
        model call fails it stays in the history without a reply.

        Raises:
            NotFoundError: unknown conversation or user
            AssistantError: the model call failed
        """
        if not message or not message.strip():
            raise InputValidationError(["message is required"])

        conversation = await self.store.get_conversation(conversation_id)
        if conversation is None:
            raise NotFoundError(f"Conversation not found: {conversation_id}")
        user = await self.store.get_user(conversation.user_id)
        if not user:
            raise NotFoundError(f"User not found: {conversation.user_id}")

        user_message = ChatMessage(role="user", content=message.strip())
        await self.store.append_message(conversation_id, user_message)
        if not conversation.history:
            await self.store.update_conversation(
                conversation_id, {"topic": extract_text_snippet(user_message.content, 60)}
            )
        history = conversation.history + [user_message]

        onboarding = not user.get("onboarded", False)
        if onboarding:
            prompt = self.ONBOARDING_PROMPT_TEMPLATE.format(
                profile_summary=user.get("user_profile_summary") or "Not available",
                skills=", ".join(user.get("skills") or []) or "Not provided",
                career_goals=user.get("career_goals") or "Not provided",
                message=user_message.content
            )
        else:
            recent = history[-settings.recent_turns - 1:-1]
            prompt = self.CONTINUATION_PROMPT_TEMPLATE.format(
                master_summary=user.get("master_summary") or user.get("user_profile_summary") or "Not available",
                conversation_summary=conversation.summary or "This conversation has just started.",
                recent_turns=format_transcript(recent) or "None",
                message=user_message.content
            )

        result = await self.llm.generate_text(prompt, system_prompt=self.SYSTEM_PROMPT)
        if not result["success"]:
            logger.error(f"Assistant reply failed for conversation {conversation_id}: {result.get('error')}")
            raise AssistantError(GENERIC_REPLY_ERROR, detail=result.get("error"))

        reply = ChatMessage(role="model", content=result["content"])
        await self.store.append_message(conversation_id, reply)
        history.append(reply)

        if onboarding:
            await self.store.update_user(conversation.user_id, {"onboarded": True})

        if len(history) - conversation.summarized_count >= settings.summary_interval:
            await self._compress_history(
                conversation_id, history, conversation.summarized_count, conversation.summary
            )

        return reply.content

    async def _compress_history(
        self,
        conversation_id: str,
        history: List[ChatMessage],
        already_summarized: int,
        previous_summary: Optional[str]
    ) -> None:
        # Only the turns after the last compression are re-read; the earlier
        # ones are represented by the previous summary
        summary = await self._summarize(history[already_summarized:], previous_summary)
        if summary is None:
            return
        await self.store.update_conversation(
            conversation_id,
            {"summary": summary, "summarized_count": len(history)}
        )
        logger.info(f"Conversation {conversation_id} summarized at {len(history)} messages")

    async def _summarize(self, history: List[ChatMessage], previous_summary: Optional[str] = None) -> Optional[str]:
        previous = f"\n**Earlier summary:**\n{previous_summary}\n" if previous_summary else ""
        prompt = self.HISTORY_SUMMARY_PROMPT_TEMPLATE.format(
            previous_summary=previous,
            transcript=format_transcript(history)
        )
        result = await self.llm.generate_text(prompt, temperature=0.3)
        if not result["success"]:
            logger.error(f"Error generating summary: {result.get('error')}")
            return None
        return result["content"]

    async def generate_history_summary(self, history: List[ChatMessage]) -> str:
        """One-paragraph summary of a transcript, never raises"""
        if not history:
            return EMPTY_HISTORY_SUMMARY
        summary = await self._summarize(history)
        return summary if summary is not None else SUMMARY_FAILED

    async def end_conversation(self, conversation_id: str) -> Dict[str, str]:
        """
        Title and summarize a conversation and fold it into the user's summary

        Returns:
            Dict with ``title`` and ``summary``
        """
        conversation = await self.store.get_conversation(conversation_id)
        if conversation is None:
            raise NotFoundError(f"Conversation not found: {conversation_id}")
        user = await self.store.get_user(conversation.user_id)
        if not user:
            raise NotFoundError(f"User not found: {conversation.user_id}")

        if not conversation.history:
            return {"title": conversation.title, "summary": EMPTY_HISTORY_SUMMARY}

        prompt = self.END_CONVERSATION_PROMPT_TEMPLATE.format(
            master_summary=user.get("master_summary") or user.get("user_profile_summary") or "Not available",
            transcript=format_transcript(conversation.history)
        )
        result = await self.llm.generate_json(
            prompt,
            schema=END_CONVERSATION_SCHEMA,
            schema_name="conversation_summary",
            system_prompt=self.SYSTEM_PROMPT
        )
        if not result["success"]:
            logger.error(f"Ending conversation {conversation_id} failed: {result.get('error')}")
            raise AssistantError("Could not summarize this conversation.", detail=result.get("error"))

        data = result["data"]
        summary = str(data.get("summary") or "").strip()
        if not summary:
            raise AssistantError("Could not summarize this conversation.", detail="summary missing from response")
        title = str(data.get("title") or "").strip() or conversation.title

        await self.store.update_conversation(conversation_id, {
            "title": title,
            "summary": summary,
            "summarized_count": len(conversation.history)
        })

        user_updates = {}
        master_summary = str(data.get("updatedMasterSummary") or "").strip()
        if master_summary:
            user_updates["master_summary"] = master_summary
        career_analysis = str(data.get("aiCareerAnalysis") or "").strip()
        if career_analysis:
            user_updates["ai_career_analysis"] = career_analysis
        if user_updates:
            await self.store.update_user(conversation.user_id, user_updates)

        logger.info(f"Conversation {conversation_id} ended: {title}")
        return {"title": title, "summary": summary}

    async def list_conversations(self, user_id: str) -> List[ConversationOverview]:
        if not await self.store.get_user(user_id):
            raise NotFoundError(f"User not found: {user_id}")
        return await self.store.list_conversations(user_id)

    async def get_career_advice(self, profile_text: Optional[str]) -> str:
        """Three career paths with skill gaps for a free-text profile"""
        if not profile_text or not profile_text.strip():
            raise InputValidationError(["profile_text is required"])

        prompt = self.CAREER_ADVICE_PROMPT_TEMPLATE.format(profile_text=profile_text.strip())
        result = await self.llm.generate_text(prompt)
        if not result["success"]:
            logger.error(f"Career advice failed: {result.get('error')}")
            raise AssistantError("Something went wrong with the AI service.", detail=result.get("error"))
        return result["content"]


# Global conversation service instance
conversation_service = ConversationService()
