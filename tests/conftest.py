"""
Shared fixtures: an in-memory store and a scripted language model
"""
import copy
import itertools
import os
from datetime import date, datetime, timedelta, timezone

# Keep the suite offline regardless of the developer's environment
os.environ["OPENROUTER_API_KEY"] = ""
os.environ["RECOMMENDATIONS_USE_LLM"] = "true"

import pytest

from aarohan.models.applicant import Applicant, EligibilityRecord
from aarohan.models.user import Conversation, ConversationOverview

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def born_years_ago(years: int, extra_days: int = 180) -> date:
    """A date of birth giving ``years`` whole years at NOW, away from the birthday boundary"""
    return (NOW - timedelta(days=round(years * 365.25) + extra_days)).date()


def eligible_fields(**overrides):
    fields = {
        "full_name": "Asha Verma",
        "date_of_birth": born_years_ago(22),
        "citizenship_confirmed": True,
        "qualification": "bca",
        "employment_status": "unemployed",
        "education_status": "not_enrolled",
        "family_income": 500000,
        "premium_institute_graduate": False,
        "advanced_degree_holder": False,
        "govt_training_enrolled": False,
        "family_govt_employee": False,
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def make_applicant():
    def _make(**overrides) -> Applicant:
        return Applicant(**eligible_fields(**overrides))
    return _make


class FakeStore:
    """Implements the MongoService methods used by the services, in memory"""

    def __init__(self):
        self.users = {}
        self.conversations = {}
        self.results = []
        self.opportunities = []
        self.fail_catalog = False
        self._ids = itertools.count(1)

    def _new_id(self) -> str:
        return f"{next(self._ids):024x}"

    async def create_user(self, user_data):
        user_id = self._new_id()
        self.users[user_id] = {**copy.deepcopy(user_data), "id": user_id}
        return user_id

    async def get_user(self, user_id):
        user = self.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def get_user_by_email(self, email):
        for user in self.users.values():
            if user.get("email") == email:
                return copy.deepcopy(user)
        return None

    async def update_user(self, user_id, fields):
        if user_id not in self.users:
            return False
        self.users[user_id].update(copy.deepcopy(fields))
        return True

    async def save_applicant(self, user_id, applicant):
        return await self.update_user(user_id, {"applicant": applicant.model_dump(mode="json")})

    async def create_conversation(self, user_id):
        conversation = Conversation(id=self._new_id(), user_id=user_id)
        self.conversations[conversation.id] = conversation
        return conversation

    async def get_conversation(self, conversation_id):
        conversation = self.conversations.get(conversation_id)
        return conversation.model_copy(deep=True) if conversation else None

    async def append_message(self, conversation_id, message):
        conversation = self.conversations.get(conversation_id)
        if conversation is None:
            return False
        self.conversations[conversation_id] = conversation.model_copy(
            update={"history": conversation.history + [message]}
        )
        return True

    async def update_conversation(self, conversation_id, fields):
        conversation = self.conversations.get(conversation_id)
        if conversation is None:
            return False
        self.conversations[conversation_id] = conversation.model_copy(update=fields)
        return True

    async def list_conversations(self, user_id):
        return [
            ConversationOverview(
                id=c.id,
                title=c.title,
                summary=c.summary,
                topic=c.topic,
                message_count=len(c.history),
                created_at=c.created_at,
                updated_at=c.updated_at
            )
            for c in reversed(list(self.conversations.values()))
            if c.user_id == user_id
        ]

    async def store_eligibility_result(self, user_id, result):
        record = EligibilityRecord(id=self._new_id(), user_id=user_id, result=result)
        self.results.append(record)
        return record

    async def get_user_eligibility_history(self, user_id):
        return [record for record in reversed(self.results) if record.user_id == user_id]

    async def get_latest_eligibility(self, user_id):
        history = await self.get_user_eligibility_history(user_id)
        return history[0] if history else None

    async def list_opportunities(self):
        if self.fail_catalog:
            raise ConnectionError("catalog unavailable")
        return list(self.opportunities)


class FakeLLM:
    """Returns queued replies; ``None`` in a queue simulates a failed call"""

    configured = True

    def __init__(self):
        self.text_replies = []
        self.json_replies = []
        self.prompts = []

    @staticmethod
    def _failure():
        return {"success": False, "error": "model unavailable", "status_code": 503}

    async def generate_text(self, prompt, system_prompt=None, temperature=0.7):
        self.prompts.append(prompt)
        if not self.text_replies:
            return self._failure()
        reply = self.text_replies.pop(0)
        if reply is None:
            return self._failure()
        return {"success": True, "content": reply}

    async def generate_json(self, prompt, schema, schema_name="response", system_prompt=None):
        self.prompts.append(prompt)
        if not self.json_replies:
            return self._failure()
        data = self.json_replies.pop(0)
        if isinstance(data, Exception):
            raise data
        if data is None:
            return self._failure()
        return {"success": True, "data": data}


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def llm():
    return FakeLLM()
