from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Dict

from app.models.contest.contest import ContestStatus

POPULAR_CONTESTS_LIMIT = 5
BEST_CREATORS_LIMIT = 3
MAX_BEST_CREATORS = 10
DEFAULT_CREATOR_NAME = "Unknown Creator"
DEFAULT_CREATOR_IMAGE = "https://i.ibb.co/4pDNDk1/avatar.png"


class LeaderboardService:
    """Read-only rankings and statistics, computed from the store on every call"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = db.users
        self.contests = db.contests
        self.payments = db.payments
        self.submissions = db.submissions

    async def get_popular_contests(self, limit: int = POPULAR_CONTESTS_LIMIT) -> List[Dict]:
        """Accepted contests with the most participants"""
        limit = min(limit, POPULAR_CONTESTS_LIMIT)
        cursor = self.contests.find(
            {"status": ContestStatus.ACCEPTED.value}
        ).sort([("participation_count", -1), ("created_at", -1)]).limit(limit)
        return await cursor.to_list(length=limit)

    async def get_best_creators(self, limit: int = BEST_CREATORS_LIMIT) -> List[Dict]:
        """
        Rank creators by total participation across their accepted contests.
        Creators without a user profile get a default name and image.
        """
        pipeline = [
            {"$match": {"status": ContestStatus.ACCEPTED.value}},
            {
                "$group": {
                    "_id": "$creator_email",
                    "total_participants": {"$sum": "$participation_count"},
                    "contest_count": {"$sum": 1}
                }
            },
            {"$sort": {"total_participants": -1, "_id": 1}},
            {"$limit": limit},
            {
                "$lookup": {
                    "from": "users",
                    "localField": "_id",
                    "foreignField": "email",
                    "as": "profile"
                }
            }
        ]

        creators = []
        async for row in self.contests.aggregate(pipeline):
            profile = row["profile"][0] if row.get("profile") else {}
            creators.append({
                "email": row["_id"],
                "name": profile.get("name") or DEFAULT_CREATOR_NAME,
                "image": profile.get("image") or DEFAULT_CREATOR_IMAGE,
                "total_participants": row.get("total_participants", 0),
                "contest_count": row.get("contest_count", 0)
            })

        return creators

    async def _sum_field(self, collection, field: str) -> float:
        """Sum of a numeric field, 0 when there are no rows"""
        pipeline = [{"$group": {"_id": None, "total": {"$sum": f"${field}"}}}]
        rows = await collection.aggregate(pipeline).to_list(length=1)
        return rows[0]["total"] if rows else 0

    async def get_admin_stats(self) -> Dict:
        """Platform-wide counts and sums for the admin dashboard"""
        status_counts = {status.value: 0 for status in ContestStatus}
        async for row in self.contests.aggregate([
            {"$group": {"_id": "$status", "count": {"$sum": 1}}}
        ]):
            if row["_id"] in status_counts:
                status_counts[row["_id"]] = row["count"]

        return {
            "user_count": await self.users.count_documents({}),
            "contest_count": await self.contests.count_documents({}),
            "payment_count": await self.payments.count_documents({}),
            "submission_count": await self.submissions.count_documents({}),
            "total_revenue": await self._sum_field(self.payments, "amount"),
            "total_participation": await self._sum_field(self.contests, "participation_count"),
            "contests_by_status": status_counts
        }
