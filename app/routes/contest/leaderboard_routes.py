from fastapi import APIRouter, Query, Depends
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.routes.auth.dependencies import require_admin
from app.services.contest.leaderboard import (
    LeaderboardService,
    POPULAR_CONTESTS_LIMIT,
    BEST_CREATORS_LIMIT,
    MAX_BEST_CREATORS
)
from app.utils.pagination import parse_positive_int
from app.utils.response import success_response
from app.utils.serializers import serialize_document

router = APIRouter(tags=["Leaderboard"])


@router.get("/popular-contests")
async def get_popular_contests(db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Accepted contests with the most participants.
    At most five, ordered by participation count.
    """
    contests = await LeaderboardService(db).get_popular_contests(POPULAR_CONTESTS_LIMIT)

    return success_response(
        message="Popular contests retrieved successfully",
        data={"contests": [serialize_document(c) for c in contests]}
    )


@router.get("/creators/best")
async def get_best_creators(
    limit: Optional[str] = Query(None, description="Number of creators to return (default 3, max 10)"),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Creators ranked by total participants across their accepted contests.
    Creators without a profile are shown with a default name and avatar.
    """
    limit = min(parse_positive_int(limit, BEST_CREATORS_LIMIT), MAX_BEST_CREATORS)
    creators = await LeaderboardService(db).get_best_creators(limit)

    return success_response(
        message="Best creators retrieved successfully",
        data={"creators": creators}
    )


@router.get("/admin-stats")
async def get_admin_stats(
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Platform totals for the admin dashboard"""
    stats = await LeaderboardService(db).get_admin_stats()
    return success_response(message="Statistics retrieved successfully", data=stats)
