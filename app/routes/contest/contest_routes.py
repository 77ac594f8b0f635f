from fastapi import APIRouter, Depends, Query
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.models.auth.token import TokenData
from app.models.contest.contest import (
    ContestCreate,
    ContestUpdate,
    ContestStatus,
    ContestStatusUpdate,
    WinnerDeclaration
)
from app.routes.auth.dependencies import get_current_identity, require_admin, require_creator
from app.services.contest.contest import ContestService
from app.utils.pagination import parse_pagination
from app.utils.response import success_response, paginated_response
from app.utils.serializers import serialize_document

router = APIRouter(prefix="/contests", tags=["Contests"])
user_contests_router = APIRouter(tags=["Contests"])


@router.post("")
async def create_contest(
    contest_data: ContestCreate,
    creator: dict = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Create a new contest (creators only).

    - Contest starts in PENDING status with no participants
    - Status, counter and winner fields in the body are ignored
    """
    contest_id = await ContestService(db).create_contest(
        contest_data,
        creator_email=creator["email"],
        creator_name=creator.get("name")
    )

    return success_response(
        message="Contest submitted for review",
        data={"inserted_id": contest_id},
        status_code=201
    )


@router.get("")
async def get_contests(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    type: Optional[str] = Query(None, description="Filter by contest type"),
    search: Optional[str] = Query(None, description="Search contest names"),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Get accepted contests (public).

    - **page**: Page number (default: 1)
    - **limit**: Contests per page (default: 10, max: 100)
    - **type**: Exact contest type, case-insensitive ("all" disables)
    - **search**: Substring of the contest name, case-insensitive
    """
    pagination = parse_pagination(page, limit)
    contests, total = await ContestService(db).list_public_contests(
        skip=pagination.skip,
        limit=pagination.limit,
        contest_type=type,
        search=search
    )

    return paginated_response("contests", contests, pagination, total, "Contests retrieved successfully")


@router.get("/types")
async def get_contest_types(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Distinct types among accepted contests"""
    types = await ContestService(db).get_contest_types()
    return success_response(message="Contest types retrieved successfully", data={"types": types})


@router.get("/creator")
async def get_my_contests(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    creator: dict = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Contests created by the caller, any status"""
    pagination = parse_pagination(page, limit)
    contests, total = await ContestService(db).list_creator_contests(
        creator["email"], pagination.skip, pagination.limit
    )

    return paginated_response("contests", contests, pagination, total, "Contests retrieved successfully")


@router.get("/admin")
async def get_all_contests(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    status: Optional[ContestStatus] = Query(None),
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """All contests regardless of status (admin only)"""
    pagination = parse_pagination(page, limit)
    contests, total = await ContestService(db).list_all_contests(
        pagination.skip, pagination.limit, status
    )

    return paginated_response("contests", contests, pagination, total, "Contests retrieved successfully")


@router.get("/winners")
async def get_winners(
    limit: Optional[str] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Recently completed contests and their winners (public)"""
    pagination = parse_pagination(limit=limit)
    contests = await ContestService(db).list_winners(pagination.limit)

    return success_response(
        message="Winners retrieved successfully",
        data={"contests": [serialize_document(c) for c in contests]}
    )


@router.patch("/creator/edit/{contest_id}")
async def update_contest(
    contest_id: str,
    update_data: ContestUpdate,
    creator: dict = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Update a contest (only owner, only in PENDING status).
    All fields optional.
    """
    result = await ContestService(db).update_contest(contest_id, creator["email"], update_data)
    return success_response(message="Contest updated successfully", data=result)


@router.delete("/creator/{contest_id}")
async def delete_my_contest(
    contest_id: str,
    creator: dict = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Delete a contest (only owner, only in PENDING status)"""
    result = await ContestService(db).delete_own_contest(contest_id, creator["email"])
    return success_response(message="Contest deleted successfully", data=result)


@router.patch("/status/{contest_id}")
async def update_contest_status(
    contest_id: str,
    status_data: ContestStatusUpdate,
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Accept or reject a pending contest (admin only)"""
    result = await ContestService(db).set_status(contest_id, status_data.status)
    return success_response(message=f"Contest {status_data.status.value}", data=result)


@router.patch("/winner/{contest_id}")
async def declare_winner(
    contest_id: str,
    winner: WinnerDeclaration,
    creator: dict = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Declare the winner of an accepted contest (only owner).
    The contest becomes COMPLETED.
    """
    result, warning = await ContestService(db).declare_winner(contest_id, creator["email"], winner)

    data = dict(result)
    if warning:
        data["warning"] = warning

    return success_response(message="Winner declared successfully", data=data)


@router.delete("/{contest_id}")
async def delete_contest(
    contest_id: str,
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Delete any contest (admin only)"""
    result = await ContestService(db).delete_contest(contest_id)
    return success_response(message="Contest deleted successfully", data=result)


@router.get("/{contest_id}")
async def get_contest(
    contest_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Get a single contest"""
    contest = await ContestService(db).get_contest_by_id(contest_id)
    return success_response(
        message="Contest retrieved successfully",
        data={"contest": serialize_document(contest)}
    )


@user_contests_router.get("/winning-contests")
async def get_winning_contests(
    identity: TokenData = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Completed contests the caller won"""
    contests = await ContestService(db).list_won_by(identity.email)

    return success_response(
        message="Winning contests retrieved successfully",
        data={
            "contests": [serialize_document(c) for c in contests],
            "total_prize_money": sum(c.get("prize_money") or 0 for c in contests)
        }
    )
