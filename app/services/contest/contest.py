import re
import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional, List, Dict, Tuple
from datetime import datetime, timezone
from bson import ObjectId

from app.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.models.contest.contest import (
    ContestStatus,
    ContestCreate,
    ContestUpdate,
    WinnerDeclaration,
    REVIEW_STATUSES
)

logger = logging.getLogger(__name__)

EDIT_FORBIDDEN_MESSAGE = "You can only modify your own contests while they are pending"
WINNER_STATUS_MESSAGE = "Winner can only be declared for an accepted contest"


def parse_object_id(identifier: str, label: str = "contest") -> ObjectId:
    """Validate an identifier before it is used in a lookup"""
    if not identifier or not ObjectId.is_valid(identifier):
        raise BadRequestError(f"Invalid {label} id")
    return ObjectId(identifier)


class ContestService:
    """Service for contest operations"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.contests = db.contests
        self.submissions = db.submissions

    async def get_contest_by_id(self, contest_id: str) -> Dict:
        """Get a contest, 400 for a malformed id and 404 when absent"""
        contest = await self.contests.find_one({"_id": parse_object_id(contest_id)})
        if not contest:
            raise NotFoundError("Contest not found")
        return contest

    async def create_contest(
        self,
        contest_data: ContestCreate,
        creator_email: str,
        creator_name: Optional[str] = None
    ) -> str:
        """Create a new contest; it always starts PENDING with no participants"""
        now = datetime.now(timezone.utc)
        contest = {
            **contest_data.model_dump(),
            "status": ContestStatus.PENDING.value,
            "participation_count": 0,
            "creator_email": creator_email,
            "creator_name": creator_name,
            "winner": None,
            "created_at": now,
            "updated_at": now
        }

        result = await self.contests.insert_one(contest)
        logger.info(f"Contest {result.inserted_id} created by {creator_email}")
        return str(result.inserted_id)

    async def _get_editable_contest(self, contest_id: str, creator_email: str) -> Dict:
        """
        The creator may only touch their own PENDING contest. Wrong owner and
        wrong status are reported with the same error.
        """
        contest = await self.get_contest_by_id(contest_id)

        if contest.get("creator_email") != creator_email or contest.get("status") != ContestStatus.PENDING:
            raise ForbiddenError(EDIT_FORBIDDEN_MESSAGE)

        return contest

    async def update_contest(self, contest_id: str, creator_email: str, update_data: ContestUpdate) -> Dict:
        """Edit a pending contest owned by the caller"""
        contest = await self._get_editable_contest(contest_id, creator_email)

        update_dict = update_data.model_dump(exclude_none=True)
        if not update_dict:
            raise BadRequestError("Nothing to update")

        update_dict["updated_at"] = datetime.now(timezone.utc)
        result = await self.contests.update_one(
            {"_id": contest["_id"], "status": ContestStatus.PENDING.value},
            {"$set": update_dict}
        )
        if result.matched_count == 0:
            # left PENDING after the check above
            raise ForbiddenError(EDIT_FORBIDDEN_MESSAGE)

        return {"matched_count": result.matched_count, "modified_count": result.modified_count}

    async def delete_own_contest(self, contest_id: str, creator_email: str) -> Dict:
        """Hard delete a pending contest owned by the caller"""
        contest = await self._get_editable_contest(contest_id, creator_email)

        result = await self.contests.delete_one(
            {"_id": contest["_id"], "status": ContestStatus.PENDING.value}
        )
        if result.deleted_count == 0:
            raise ForbiddenError(EDIT_FORBIDDEN_MESSAGE)

        return {"deleted_count": result.deleted_count}

    async def delete_contest(self, contest_id: str) -> Dict:
        """Admin hard delete, any status"""
        result = await self.contests.delete_one({"_id": parse_object_id(contest_id)})
        if result.deleted_count == 0:
            raise NotFoundError("Contest not found")

        logger.info(f"Contest {contest_id} deleted by admin")
        return {"deleted_count": result.deleted_count}

    async def set_status(self, contest_id: str, status: ContestStatus) -> Dict:
        """Admin review: PENDING -> ACCEPTED or REJECTED"""
        if status not in REVIEW_STATUSES:
            raise BadRequestError("Status must be Accepted or Rejected")

        contest = await self.get_contest_by_id(contest_id)
        if contest.get("status") != ContestStatus.PENDING:
            raise BadRequestError(f"Contest is already {contest.get('status')}")

        result = await self.contests.update_one(
            {"_id": contest["_id"], "status": ContestStatus.PENDING.value},
            {"$set": {"status": status.value, "updated_at": datetime.now(timezone.utc)}}
        )
        if result.matched_count == 0:
            raise BadRequestError("Contest is no longer pending")

        logger.info(f"Contest {contest_id} marked {status.value}")
        return {"matched_count": result.matched_count, "modified_count": result.modified_count}

    async def declare_winner(
        self,
        contest_id: str,
        creator_email: str,
        winner: WinnerDeclaration
    ) -> Tuple[Dict, Optional[str]]:
        """
        Complete an accepted contest by recording its winner.

        Returns the update result and a warning when the winner has no
        submission for this contest; that case does not block the update.
        """
        contest = await self.get_contest_by_id(contest_id)

        if contest.get("creator_email") != creator_email:
            raise ForbiddenError("Only the contest creator can declare the winner")

        if contest.get("status") != ContestStatus.ACCEPTED:
            raise BadRequestError(WINNER_STATUS_MESSAGE)

        warning = None
        submission = await self.submissions.find_one({"contest_id": str(contest["_id"]), "email": winner.email})
        if not submission:
            warning = f"{winner.email} has no submission for this contest"
            logger.warning(f"Winner declared without submission: contest={contest_id} {warning}")

        now = datetime.now(timezone.utc)
        result = await self.contests.update_one(
            {"_id": contest["_id"], "status": ContestStatus.ACCEPTED.value},
            {
                "$set": {
                    "status": ContestStatus.COMPLETED.value,
                    "winner": {
                        "email": winner.email,
                        "name": winner.name,
                        "image": winner.image,
                        "declared_at": now
                    },
                    "updated_at": now
                }
            }
        )
        if result.matched_count == 0:
            raise BadRequestError(WINNER_STATUS_MESSAGE)

        return {"matched_count": result.matched_count, "modified_count": result.modified_count}, warning

    def _build_public_query(self, contest_type: Optional[str] = None, search: Optional[str] = None) -> Dict:
        """Public listings only ever see ACCEPTED contests"""
        query = {"status": ContestStatus.ACCEPTED.value}

        if contest_type and contest_type.strip() and contest_type.lower() != "all":
            query["contest_type"] = {"$regex": f"^{re.escape(contest_type.strip())}$", "$options": "i"}

        if search and search.strip():
            query["name"] = {"$regex": re.escape(search.strip()), "$options": "i"}

        return query

    async def list_public_contests(
        self,
        skip: int = 0,
        limit: int = 10,
        contest_type: Optional[str] = None,
        search: Optional[str] = None
    ) -> Tuple[List[Dict], int]:
        query = self._build_public_query(contest_type, search)

        cursor = self.contests.find(query).sort("created_at", -1).skip(skip).limit(limit)
        contests = await cursor.to_list(length=limit)
        total = await self.contests.count_documents(query)
        return contests, total

    async def get_contest_types(self) -> List[str]:
        types = await self.contests.distinct("contest_type", {"status": ContestStatus.ACCEPTED.value})
        return sorted(t for t in types if t)

    async def list_creator_contests(self, creator_email: str, skip: int = 0, limit: int = 10) -> Tuple[List[Dict], int]:
        query = {"creator_email": creator_email}

        cursor = self.contests.find(query).sort("created_at", -1).skip(skip).limit(limit)
        contests = await cursor.to_list(length=limit)
        total = await self.contests.count_documents(query)
        return contests, total

    async def list_all_contests(self, skip: int = 0, limit: int = 10, status: Optional[ContestStatus] = None) -> Tuple[List[Dict], int]:
        """Admin view across every status"""
        query = {"status": status.value} if status else {}

        cursor = self.contests.find(query).sort("created_at", -1).skip(skip).limit(limit)
        contests = await cursor.to_list(length=limit)
        total = await self.contests.count_documents(query)
        return contests, total

    async def list_winners(self, limit: int = 10) -> List[Dict]:
        """Most recently completed contests with their winners"""
        cursor = self.contests.find({
            "status": ContestStatus.COMPLETED.value,
            "winner": {"$ne": None}
        }).sort("winner.declared_at", -1).limit(limit)
        return await cursor.to_list(length=limit)

    async def list_won_by(self, email: str) -> List[Dict]:
        cursor = self.contests.find({
            "status": ContestStatus.COMPLETED.value,
            "winner.email": email
        }).sort("winner.declared_at", -1)
        return await cursor.to_list(length=None)
