from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Dict, Any
from datetime import datetime
from enum import Enum


class ContestStatus(str, Enum):
    """
    Contest status types - State Machine

    State Transitions:
    - PENDING -> ACCEPTED (admin approves)
    - PENDING -> REJECTED (admin rejects)
    - ACCEPTED -> COMPLETED (creator declares a winner)

    REJECTED and COMPLETED are terminal.
    """
    PENDING = "Pending"  # Waiting for admin review, creator can edit/delete
    ACCEPTED = "Accepted"  # Public, open for payments and submissions
    REJECTED = "Rejected"
    COMPLETED = "Completed"  # Winner declared


# Statuses an admin may set through the review endpoint
REVIEW_STATUSES = (ContestStatus.ACCEPTED, ContestStatus.REJECTED)


class ContestCreate(BaseModel):
    """Schema for creating a contest"""
    name: str = Field(..., min_length=1, max_length=200)
    contest_type: Optional[str] = Field(None, max_length=100)
    price: float = Field(0, ge=0, description="Entry fee")
    prize_money: float = Field(0, ge=0)
    deadline: Optional[datetime] = None
    description: Optional[str] = None
    image: Optional[str] = None
    task_instruction: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict, description="Creator-defined extra fields")


class ContestUpdate(BaseModel):
    """Schema for updating a contest (only allowed while PENDING)"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    contest_type: Optional[str] = Field(None, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    prize_money: Optional[float] = Field(None, ge=0)
    deadline: Optional[datetime] = None
    description: Optional[str] = None
    image: Optional[str] = None
    task_instruction: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class ContestStatusUpdate(BaseModel):
    """Admin review decision"""
    status: ContestStatus


class WinnerDeclaration(BaseModel):
    """Winner chosen by the contest creator"""
    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None

