"""
Payment Routes
Payment intents, payment recording and the caller's participations
"""
from fastapi import APIRouter, Depends
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.models.auth.token import TokenData
from app.models.payment.payment import PaymentIntentRequest, PaymentCreate
from app.routes.auth.dependencies import get_current_identity, get_payment_gateway
from app.services.payment.gateways.base import BasePaymentGateway
from app.services.payment.payment_service import PaymentService
from app.utils.response import success_response
from app.utils.serializers import serialize_document

router = APIRouter(tags=["Payments"])


@router.post("/create-payment-intent")
async def create_payment_intent(
    intent_data: PaymentIntentRequest,
    identity: TokenData = Depends(get_current_identity),
    gateway: Optional[BasePaymentGateway] = Depends(get_payment_gateway),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Create a payment intent for a contest entry fee.

    - **price**: Amount in major units (e.g. 12.50), must be at least one cent
    - Nothing is stored; the client confirms the intent and then calls POST /payments
    """
    result = await PaymentService(db).create_payment_intent(
        intent_data.price,
        gateway,
        email=identity.email
    )

    return success_response(
        message="Payment intent created",
        data={
            "clientSecret": result["client_secret"],
            "amount": result["amount"],
            "currency": result["currency"]
        }
    )


@router.post("/payments")
async def record_payment(
    payment_data: PaymentCreate,
    identity: TokenData = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Record a confirmed payment and count the caller as a participant.
    The payer email always comes from the token, never from the body.
    """
    result = await PaymentService(db).record_payment(payment_data, identity.email)

    return success_response(
        message="Payment recorded successfully",
        data=result,
        status_code=201
    )


@router.get("/payments/status/{contest_id}")
async def get_payment_status(
    contest_id: str,
    identity: TokenData = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Whether the caller has paid for a contest"""
    paid = await PaymentService(db).has_paid(identity.email, contest_id)
    return success_response(message="Payment status retrieved", data={"paid": paid})


@router.get("/participated-contests")
async def get_participated_contests(
    identity: TokenData = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Contests the caller paid for, newest payment first"""
    contests = await PaymentService(db).get_participated_contests(identity.email)

    return success_response(
        message="Participated contests retrieved successfully",
        data={
            "contests": [serialize_document(c) for c in contests],
            "total": len(contests)
        }
    )
