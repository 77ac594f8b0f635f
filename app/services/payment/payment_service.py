"""
Payment Service
Payment intents, payment recording and the participation counter
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.exceptions import BadRequestError, InvalidAmountError, NotFoundError, UpstreamError
from app.models.payment.payment import PaymentCreate, PaymentInDB
from app.services.contest.contest import ContestService
from app.services.payment.gateways.base import BasePaymentGateway

logger = logging.getLogger(__name__)


def to_minor_units(price: float) -> int:
    """Convert a decimal price to whole cents, truncating fractions of a cent"""
    try:
        cents = Decimal(str(price)) * 100
        return int(cents.to_integral_value(rounding=ROUND_DOWN))
    except (InvalidOperation, ValueError, OverflowError):
        raise InvalidAmountError("Price must be a number")


class PaymentService:
    """
    Service for payment operations.
    Handles intent creation and records confirmed payments.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.payments = db.payments
        self.contests = db.contests
        self.contest_service = ContestService(db)

    async def create_payment_intent(
        self,
        price: float,
        gateway: Optional[BasePaymentGateway],
        email: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Ask the provider for a payment intent. Nothing is persisted.

        Raises InvalidAmountError when the price is under one cent and
        UpstreamError when the provider is unavailable or refuses.
        """
        amount = to_minor_units(price)
        if amount < 1:
            raise InvalidAmountError("Payment amount must be at least 1 cent")

        if gateway is None:
            raise UpstreamError("Payment provider is not configured")

        result = await gateway.create_payment_intent(
            amount=amount,
            metadata={"email": email} if email else None
        )
        if not result.success:
            raise UpstreamError(result.error_message or "Failed to create payment intent")

        return {
            "client_secret": result.client_secret,
            "amount": result.amount,
            "currency": result.currency
        }

    async def record_payment(self, payment_data: PaymentCreate, email: str) -> Dict[str, Any]:
        """
        Store a confirmed payment and bump the contest's participation counter.

        The insert and the increment are two separate writes; a failure in
        between leaves the payment without its increment.
        """
        contest = await self.contest_service.get_contest_by_id(payment_data.contest_id)
        contest_id = str(contest["_id"])

        payment = PaymentInDB(
            email=email,
            contest_id=contest_id,
            amount=payment_data.amount,
            transaction_id=payment_data.transaction_id,
            paid_at=payment_data.paid_at or datetime.now(timezone.utc)
        )
        payment_result = await self.payments.insert_one(payment.model_dump())

        contest_result = await self.contests.update_one(
            {"_id": contest["_id"]},
            {"$inc": {"participation_count": 1}}
        )
        logger.info(
            f"Payment {payment_result.inserted_id} recorded for contest {contest_id} by {email}"
        )

        return {
            "payment_result": {"inserted_id": str(payment_result.inserted_id)},
            "contest_update_result": {
                "matched_count": contest_result.matched_count,
                "modified_count": contest_result.modified_count
            }
        }

    async def has_paid(self, email: str, contest_id: str) -> bool:
        contest = await self.contest_service.get_contest_by_id(contest_id)
        payment = await self.payments.find_one({"email": email, "contest_id": str(contest["_id"])})
        return payment is not None

    async def get_participated_contests(self, email: str) -> List[Dict[str, Any]]:
        """Contests the user paid for, newest payment first, each with its payment"""
        payments = await self.payments.find({"email": email}).sort("paid_at", -1).to_list(length=None)

        contests = []
        for payment in payments:
            contest_id = payment["contest_id"]
            try:
                contest = await self.contest_service.get_contest_by_id(contest_id)
            except (NotFoundError, BadRequestError):
                # contest deleted since payment, or a stray id
                logger.warning(f"Payment {payment['_id']} references missing contest {contest_id}")
                continue

            contest["payment"] = {
                "id": str(payment["_id"]),
                "amount": payment.get("amount"),
                "transaction_id": payment.get("transaction_id"),
                "paid_at": payment.get("paid_at")
            }
            contests.append(contest)

        return contests
