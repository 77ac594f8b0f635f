from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from enum import Enum


class UserRole(str, Enum):
    """Exactly one role per user; USER is the registration default"""
    USER = "User"
    CREATOR = "Creator"
    ADMIN = "Admin"


class UserCreate(BaseModel):
    """Schema for first-time registration"""
    email: EmailStr
    name: Optional[str] = Field(None, max_length=100)
    image: Optional[str] = None

    class Config:
        # profile fields the client sends along are kept as supplied
        extra = "allow"


class ProfileUpdate(BaseModel):
    """Self-service profile update (email and role cannot be changed)"""
    name: Optional[str] = Field(None, max_length=100)
    image: Optional[str] = None
    address: Optional[str] = None


class RoleUpdate(BaseModel):
    """Admin role change"""
    role: UserRole

