from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.models.auth.token import TokenData
from app.models.contest.submission import SubmissionCreate
from app.routes.auth.dependencies import get_current_identity, require_creator
from app.services.auth.user_service import UserService
from app.services.contest.submission import SubmissionService
from app.utils.response import success_response
from app.utils.serializers import serialize_document

router = APIRouter(prefix="/submissions", tags=["Submissions"])


@router.post("")
async def create_submission(
    submission_data: SubmissionCreate,
    identity: TokenData = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Submit an entry to a contest.

    - Caller must have a recorded payment for the contest
    - One submission per participant per contest
    """
    # display fields come from the stored profile, not the request body
    user = await UserService(db).get_user_by_email(identity.email) or {}

    submission_id = await SubmissionService(db).create_submission(
        submission_data,
        email=identity.email,
        name=user.get("name"),
        image=user.get("image")
    )

    return success_response(
        message="Submission received",
        data={"inserted_id": submission_id},
        status_code=201
    )


@router.get("/my")
async def get_my_submissions(
    identity: TokenData = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """The caller's own submissions, newest first"""
    submissions = await SubmissionService(db).get_user_submissions(identity.email)

    return success_response(
        message="Submissions retrieved successfully",
        data={"submissions": [serialize_document(s) for s in submissions]}
    )


@router.get("/contest/{contest_id}")
async def get_contest_submissions(
    contest_id: str,
    creator: dict = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """All submissions of a contest (contest creator only)"""
    submissions = await SubmissionService(db).get_submissions_for_contest(contest_id, creator["email"])

    return success_response(
        message="Submissions retrieved successfully",
        data={
            "submissions": [serialize_document(s) for s in submissions],
            "total": len(submissions)
        }
    )
