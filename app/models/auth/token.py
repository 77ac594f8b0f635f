from pydantic import BaseModel, EmailStr
from typing import Optional


class IdentityClaims(BaseModel):
    """Claims the client asks to have signed into a token"""
    email: EmailStr
    name: Optional[str] = None

    class Config:
        extra = "allow"


class TokenData(BaseModel):
    """Token payload data"""
    email: Optional[str] = None
