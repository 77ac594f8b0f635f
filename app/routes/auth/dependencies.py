import logging
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.database import get_database
from app.models.auth.token import TokenData
from app.models.auth.user import UserRole
from app.services.auth.security import security_service
from app.services.auth.user_service import UserService
from app.services.payment.gateways.base import BasePaymentGateway
from app.services.payment.gateways.factory import PaymentGatewayFactory

logger = logging.getLogger(__name__)

# Bearer token from the Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/jwt", auto_error=False)


async def get_current_identity(
    token: Annotated[Optional[str], Depends(oauth2_scheme)]
) -> TokenData:
    """Reject with 401 unless a valid token is presented"""
    if not token:
        raise UnauthorizedError("Unauthorized access")

    token_data = security_service.verify_token(token)
    if token_data is None or token_data.email is None:
        raise UnauthorizedError("Unauthorized access")

    return token_data


def require_role(role: UserRole):
    """
    Gate a route on the caller's stored role.

    The role is read from the users collection on every request, so a role
    change applies to the caller's next request.
    """
    async def _guard(
        identity: TokenData = Depends(get_current_identity),
        db: AsyncIOMotorDatabase = Depends(get_database)
    ) -> dict:
        user = await UserService(db).get_user_by_email(identity.email)
        if user is None or user.get("role") != role.value:
            raise ForbiddenError("Forbidden access")
        return user

    return _guard


require_admin = require_role(UserRole.ADMIN)
require_creator = require_role(UserRole.CREATOR)


async def get_payment_gateway() -> Optional[BasePaymentGateway]:
    """Configured payment gateway, or None when it cannot be built"""
    try:
        return PaymentGatewayFactory.get_gateway()
    except ValueError as e:
        logger.error(f"Payment gateway unavailable: {e}")
        return None
