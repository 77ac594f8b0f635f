import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional, Dict, List, Tuple
from datetime import datetime, timezone
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.models.auth.user import UserCreate, ProfileUpdate, UserRole

logger = logging.getLogger(__name__)

# Fields the server owns on a user document
PROTECTED_USER_FIELDS = {"_id", "role", "created_at", "updated_at"}


class UserService:
    """Identity and role store"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users_collection = db.users

    async def get_user_by_email(self, email: str) -> Optional[Dict]:
        """Get user by email"""
        return await self.users_collection.find_one({"email": email})

    async def get_user_by_id(self, user_id: str) -> Dict:
        """Get user by ID, validating the identifier first"""
        if not ObjectId.is_valid(user_id):
            raise BadRequestError("Invalid user id")

        user = await self.users_collection.find_one({"_id": ObjectId(user_id)})
        if not user:
            raise NotFoundError("User not found")
        return user

    async def register_user(self, user_data: UserCreate) -> Tuple[bool, Optional[str]]:
        """
        Register a user on first login.

        Idempotent per email: returns (False, None) when the user already
        exists, (True, inserted_id) otherwise. New users always get the
        USER role regardless of what the client sent.
        """
        existing = await self.get_user_by_email(user_data.email)
        if existing:
            return False, None

        user_doc = {
            k: v for k, v in user_data.model_dump().items()
            if k not in PROTECTED_USER_FIELDS
        }
        user_doc["role"] = UserRole.USER.value
        user_doc["created_at"] = datetime.now(timezone.utc)

        try:
            result = await self.users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            # a concurrent registration won the race
            return False, None

        logger.info(f"Registered user {user_data.email}")
        return True, str(result.inserted_id)

    async def get_role(self, email: str) -> Optional[str]:
        user = await self.get_user_by_email(email)
        return user.get("role") if user else None

    async def has_role(self, email: str, role: UserRole) -> bool:
        return await self.get_role(email) == role.value

    async def list_users(self, skip: int = 0, limit: int = 10) -> Tuple[List[Dict], int]:
        """Page of users, newest first, with the total count"""
        cursor = self.users_collection.find({}).sort("created_at", -1).skip(skip).limit(limit)
        users = await cursor.to_list(length=limit)
        total = await self.users_collection.count_documents({})
        return users, total

    async def update_profile(self, email: str, caller_email: str, profile: ProfileUpdate) -> Dict:
        """Update the caller's own display fields"""
        if email != caller_email:
            raise ForbiddenError("You can only update your own profile")

        update_dict = profile.model_dump(exclude_none=True)
        if not update_dict:
            raise BadRequestError("Nothing to update")

        update_dict["updated_at"] = datetime.now(timezone.utc)
        result = await self.users_collection.update_one({"email": email}, {"$set": update_dict})
        if result.matched_count == 0:
            raise NotFoundError("User not found")

        return {"matched_count": result.matched_count, "modified_count": result.modified_count}

    async def update_role(self, user_id: str, role: UserRole) -> Dict:
        """Admin role change; takes effect on the user's next request"""
        user = await self.get_user_by_id(user_id)

        result = await self.users_collection.update_one(
            {"_id": user["_id"]},
            {"$set": {"role": role.value, "updated_at": datetime.now(timezone.utc)}}
        )
        logger.info(f"Role of {user['email']} changed from {user.get('role')} to {role.value}")

        return {"matched_count": result.matched_count, "modified_count": result.modified_count}
