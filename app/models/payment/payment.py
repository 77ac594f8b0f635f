from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PaymentIntentRequest(BaseModel):
    """Price to charge, in major currency units"""
    price: float


class PaymentCreate(BaseModel):
    """Payment confirmed client-side, recorded by the server"""
    contest_id: str
    amount: float = Field(..., ge=0)
    transaction_id: str = Field(..., min_length=1)
    paid_at: Optional[datetime] = None


class PaymentInDB(BaseModel):
    """Schema for payment stored in database"""
    email: str
    contest_id: str
    amount: float
    transaction_id: str
    paid_at: datetime
