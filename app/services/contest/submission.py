import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional, List, Dict
from datetime import datetime, timezone
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import DuplicateSubmissionError, ForbiddenError
from app.models.contest.submission import SubmissionCreate, SubmissionInDB
from app.services.contest.contest import ContestService

logger = logging.getLogger(__name__)


class SubmissionService:
    """Service for contest submission operations"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.submissions = db.submissions
        self.payments = db.payments
        self.contest_service = ContestService(db)

    async def create_submission(
        self,
        submission_data: SubmissionCreate,
        email: str,
        name: Optional[str] = None,
        image: Optional[str] = None
    ) -> str:
        """
        Record one entry per (contest, participant).

        The participant must have paid for the contest. The existence check
        gives a readable error; the unique index on (contest_id, email)
        rejects the concurrent case the check cannot see.
        """
        contest = await self.contest_service.get_contest_by_id(submission_data.contest_id)
        # ids are stored in their canonical lowercase form
        contest_id = str(contest["_id"])

        payment = await self.payments.find_one({"email": email, "contest_id": contest_id})
        if not payment:
            raise ForbiddenError("You must register for this contest before submitting")

        existing = await self.submissions.find_one({"contest_id": contest_id, "email": email})
        if existing:
            raise DuplicateSubmissionError()

        submission = SubmissionInDB(
            contest_id=contest_id,
            email=email,
            name=name,
            image=image,
            submission_link=submission_data.submission_link,
            entry=submission_data.entry,
            submitted_at=datetime.now(timezone.utc)
        )

        try:
            result = await self.submissions.insert_one(submission.model_dump())
        except DuplicateKeyError:
            raise DuplicateSubmissionError()

        logger.info(f"Submission {result.inserted_id} for contest {contest_id} by {email}")
        return str(result.inserted_id)

    async def get_submissions_for_contest(self, contest_id: str, creator_email: str) -> List[Dict]:
        """Only the contest's creator may read its submissions"""
        contest = await self.contest_service.get_contest_by_id(contest_id)

        if contest.get("creator_email") != creator_email:
            raise ForbiddenError("Only the contest creator can view submissions")

        cursor = self.submissions.find({"contest_id": str(contest["_id"])}).sort("submitted_at", 1)
        return await cursor.to_list(length=None)

    async def get_user_submissions(self, email: str) -> List[Dict]:
        cursor = self.submissions.find({"email": email}).sort("submitted_at", -1)
        return await cursor.to_list(length=None)
