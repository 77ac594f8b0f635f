import os
import logging
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from dotenv import load_dotenv
from app.models.auth.token import TokenData

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Get environment variables
SECRET_KEY = os.getenv("JWT_SECRET")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))


class SecurityService:
    """Issues and verifies the signed, time-limited access token"""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None
    ):
        self.secret_key = secret_key or SECRET_KEY
        self.algorithm = algorithm or ALGORITHM
        self.expire_minutes = expire_minutes or ACCESS_TOKEN_EXPIRE_MINUTES

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Create JWT access token binding the caller's email"""
        if not self.secret_key:
            raise ValueError("JWT_SECRET is not configured")

        to_encode = data.copy()
        email = to_encode.get("email")
        if not email:
            raise ValueError("Token claims must include an email")

        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))

        to_encode.update({"sub": email, "iat": now, "exp": expire})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: Optional[str]) -> Optional[TokenData]:
        """Verify and decode JWT token. Returns None for anything unusable."""
        if not token or not self.secret_key:
            return None

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            return None

        email = payload.get("email") or payload.get("sub")
        if not email:
            return None

        return TokenData(email=email)


security_service = SecurityService()
