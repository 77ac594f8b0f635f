from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime


class SubmissionCreate(BaseModel):
    """Schema for creating a submission"""
    contest_id: str
    submission_link: Optional[str] = None
    entry: Dict[str, Any] = Field(default_factory=dict, description="Free-form entry payload")


class SubmissionInDB(BaseModel):
    """Schema for submission stored in database"""
    contest_id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    submission_link: Optional[str] = None
    entry: Dict[str, Any] = {}
    submitted_at: datetime
