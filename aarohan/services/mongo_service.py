"""
MongoDB service for database operations
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorClient
from bson import ObjectId
import logging

from ..config import settings
from ..models.applicant import Applicant, EligibilityResult, EligibilityRecord
from ..models.opportunity import Opportunity
from ..models.user import ChatMessage, Conversation, ConversationOverview

logger = logging.getLogger(__name__)


def _object_id(value: str) -> Optional[ObjectId]:
    """Parse a client supplied id, None when it is not a valid ObjectId"""
    if isinstance(value, ObjectId):
        return value
    if value and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MongoService:
    """Service for MongoDB operations"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db = None

    async def connect(self):
        """Connect to MongoDB"""
        try:
            self.client = AsyncIOMotorClient(settings.mongodb_url, tz_aware=True)
            self.db = self.client[settings.mongodb_db_name]

            # Test connection
            await self.client.admin.command('ping')
            await self._ensure_indexes()
            logger.info("Connected to MongoDB successfully")

        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")

    async def health_check(self) -> bool:
        """Check MongoDB connection health"""
        if self.client is None:
            return False
        try:
            await self.client.admin.command('ping')
            return True
        except Exception:
            return False

    async def _ensure_indexes(self):
        await self.db.users.create_index("email", unique=True)
        await self.db.conversations.create_index("user_id")
        await self.db.eligibility_results.create_index([("user_id", 1), ("checked_at", -1)])
        await self.db.opportunities.create_index("id", unique=True)

    # User operations
    async def create_user(self, user_data: Dict[str, Any]) -> str:
        """Insert a new user document and return its id"""
        try:
            now = _utcnow()
            document = {**user_data, "created_at": now, "updated_at": now}
            result = await self.db.users.insert_one(document)
            logger.info(f"User created: {result.inserted_id}")
            return str(result.inserted_id)
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            raise

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get user document by id"""
        oid = _object_id(user_id)
        if oid is None:
            return None
        doc = await self.db.users.find_one({"_id": oid})
        if doc:
            doc["id"] = str(doc.pop("_id"))
        return doc

    async def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        doc = await self.db.users.find_one({"email": email})
        if doc:
            doc["id"] = str(doc.pop("_id"))
        return doc

    async def update_user(self, user_id: str, fields: Dict[str, Any]) -> bool:
        """Set fields on a user, True when the user exists"""
        oid = _object_id(user_id)
        if oid is None:
            return False
        try:
            result = await self.db.users.update_one(
                {"_id": oid},
                {"$set": {**fields, "updated_at": _utcnow()}}
            )
            return result.matched_count > 0
        except Exception as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            raise

    async def save_applicant(self, user_id: str, applicant: Applicant) -> bool:
        """Store eligibility form data on the user document"""
        return await self.update_user(user_id, {"applicant": applicant.model_dump(mode="json")})

    # Eligibility history (append-only)
    async def store_eligibility_result(self, user_id: str, result: EligibilityResult) -> EligibilityRecord:
        """Append an eligibility result to the user's history"""
        try:
            checked_at = _utcnow()
            insert = await self.db.eligibility_results.insert_one({
                "user_id": user_id,
                "result": result.model_dump(),
                "checked_at": checked_at
            })
            return EligibilityRecord(
                id=str(insert.inserted_id),
                user_id=user_id,
                result=result,
                checked_at=checked_at
            )
        except Exception as e:
            logger.error(f"Failed to store eligibility result: {e}")
            raise

    async def get_user_eligibility_history(self, user_id: str) -> List[EligibilityRecord]:
        """Get user's eligibility check history, newest first"""
        cursor = self.db.eligibility_results.find({"user_id": user_id}).sort("checked_at", -1)
        records = []
        async for doc in cursor:
            records.append(EligibilityRecord(
                id=str(doc["_id"]),
                user_id=doc["user_id"],
                result=EligibilityResult(**doc["result"]),
                checked_at=doc["checked_at"]
            ))
        return records

    async def get_latest_eligibility(self, user_id: str) -> Optional[EligibilityRecord]:
        history = await self.get_user_eligibility_history(user_id)
        return history[0] if history else None

    # Opportunity catalog
    async def list_opportunities(self) -> List[Opportunity]:
        cursor = self.db.opportunities.find({}, {"_id": 0}).sort("id", 1)
        opportunities = []
        async for doc in cursor:
            opportunities.append(Opportunity(**doc))
        return opportunities

    async def upsert_opportunities(self, opportunities: List[Opportunity]) -> int:
        """Insert or replace catalog entries, returns how many were written"""
        written = 0
        for opportunity in opportunities:
            await self.db.opportunities.replace_one(
                {"id": opportunity.id},
                opportunity.model_dump(),
                upsert=True
            )
            written += 1
        logger.info(f"Opportunity catalog updated: {written} entries")
        return written

    # Conversation operations
    async def create_conversation(self, user_id: str) -> Conversation:
        now = _utcnow()
        conversation = Conversation(id="pending", user_id=user_id, created_at=now, updated_at=now)
        document = conversation.model_dump(exclude={"id"})
        result = await self.db.conversations.insert_one(document)
        logger.info(f"Conversation started: {result.inserted_id} for user {user_id}")
        return conversation.model_copy(update={"id": str(result.inserted_id)})

    async def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        oid = _object_id(conversation_id)
        if oid is None:
            return None
        doc = await self.db.conversations.find_one({"_id": oid})
        if not doc:
            return None
        doc["id"] = str(doc.pop("_id"))
        return Conversation(**doc)

    async def append_message(self, conversation_id: str, message: ChatMessage) -> bool:
        oid = _object_id(conversation_id)
        if oid is None:
            return False
        result = await self.db.conversations.update_one(
            {"_id": oid},
            {
                "$push": {"history": message.model_dump()},
                "$set": {"updated_at": _utcnow()}
            }
        )
        return result.matched_count > 0

    async def update_conversation(self, conversation_id: str, fields: Dict[str, Any]) -> bool:
        oid = _object_id(conversation_id)
        if oid is None:
            return False
        result = await self.db.conversations.update_one(
            {"_id": oid},
            {"$set": {**fields, "updated_at": _utcnow()}}
        )
        return result.matched_count > 0

    async def list_conversations(self, user_id: str) -> List[ConversationOverview]:
        """Conversations of a user, most recently active first"""
        pipeline = [
            {"$match": {"user_id": user_id}},
            {"$sort": {"updated_at": -1}},
            {"$project": {
                "title": 1,
                "summary": 1,
                "topic": 1,
                "created_at": 1,
                "updated_at": 1,
                "message_count": {"$size": {"$ifNull": ["$history", []]}}
            }}
        ]
        overviews = []
        async for doc in self.db.conversations.aggregate(pipeline):
            doc["id"] = str(doc.pop("_id"))
            overviews.append(ConversationOverview(**doc))
        return overviews

    # Statistics
    async def get_database_stats(self) -> Dict[str, Any]:
        """Get database statistics"""
        try:
            return {
                "total_users": await self.db.users.count_documents({}),
                "total_conversations": await self.db.conversations.count_documents({}),
                "total_eligibility_checks": await self.db.eligibility_results.count_documents({}),
                "total_opportunities": await self.db.opportunities.count_documents({})
            }
        except Exception as e:
            logger.error(f"Failed to get database stats: {e}")
            return {}


# Global MongoDB service instance
mongo_service = MongoService()
