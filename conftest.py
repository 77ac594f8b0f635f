"""
Shared fixtures: the real application with the store swapped for
mongomock-motor and the payment gateway swapped for a recording fake.
"""
import os
import asyncio
from datetime import datetime, timezone

os.environ["JWT_SECRET"] = "test-secret"
os.environ["DATABASE_NAME"] = "contestHubTest"

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.database import Database, get_database
from app.main import app
from app.routes.auth.dependencies import get_payment_gateway
from app.services.auth.security import security_service
from app.services.payment.gateways.base import BasePaymentGateway, PaymentIntentResult


class FakeGateway(BasePaymentGateway):
    gateway_id = "fake"
    gateway_name = "Fake Gateway"

    def __init__(self, fail: bool = False):
        super().__init__({"currency": "usd"})
        self.fail = fail
        self.calls = []

    def _validate_config(self):
        pass

    async def create_payment_intent(self, amount, currency=None, metadata=None):
        self.calls.append({"amount": amount, "metadata": metadata})
        if self.fail:
            return PaymentIntentResult(
                success=False,
                amount=amount,
                currency=self.currency,
                error_message="card network unavailable"
            )
        return PaymentIntentResult(
            success=True,
            amount=amount,
            currency=self.currency,
            client_secret=f"pi_test_{len(self.calls)}_secret",
            gateway_intent_id=f"pi_test_{len(self.calls)}"
        )


def run(coro):
    """Drive a store call from a synchronous test"""
    return asyncio.run(coro)


@pytest.fixture
def db():
    database = AsyncMongoMockClient()["contestHubTest"]
    run(Database.create_indexes(database))
    return database


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(db, gateway):
    async def override_get_database():
        return db

    async def override_get_payment_gateway():
        return gateway

    app.dependency_overrides[get_database] = override_get_database
    app.dependency_overrides[get_payment_gateway] = override_get_payment_gateway

    yield TestClient(app)

    app.dependency_overrides.clear()


def auth_headers(email: str) -> dict:
    token = security_service.create_access_token({"email": email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def make_user(db):
    def _make_user(email: str, role: str = "User", name: str = None, image: str = None) -> dict:
        user = {
            "email": email,
            "name": name or email.split("@")[0].title(),
            "image": image,
            "role": role,
            "created_at": datetime.now(timezone.utc)
        }
        result = run(db.users.insert_one(user))
        user["_id"] = result.inserted_id
        return user

    return _make_user


@pytest.fixture
def make_contest(db):
    def _make_contest(
        creator_email: str,
        status: str = "Pending",
        participation_count: int = 0,
        **fields
    ) -> str:
        now = datetime.now(timezone.utc)
        contest = {
            "name": fields.pop("name", "Logo Design Sprint"),
            "contest_type": fields.pop("contest_type", "Design"),
            "price": fields.pop("price", 10),
            "prize_money": fields.pop("prize_money", 100),
            "details": {},
            "status": status,
            "participation_count": participation_count,
            "creator_email": creator_email,
            "winner": None,
            "created_at": now,
            "updated_at": now,
            **fields
        }
        result = run(db.contests.insert_one(contest))
        return str(result.inserted_id)

    return _make_contest


@pytest.fixture
def get_contest(db):
    def _get_contest(contest_id: str) -> dict:
        return run(db.contests.find_one({"_id": ObjectId(contest_id)}))

    return _get_contest
