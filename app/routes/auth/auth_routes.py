import logging
from fastapi import APIRouter

from app.models.auth.token import IdentityClaims
from app.services.auth.security import security_service
from app.utils.response import success_response, error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/jwt")
async def issue_token(claims: IdentityClaims):
    """
    Issue an access token for the given identity claims.
    The token carries the email and expires one hour after issuance.
    """
    try:
        token = security_service.create_access_token(data=claims.model_dump(exclude_none=True))
    except ValueError as e:
        logger.error(f"Token issue failed: {e}")
        return error_response(
            message="Server configuration error. Please contact administrator.",
            status_code=500
        )

    return success_response(
        message="Token issued",
        data={"token": token, "token_type": "bearer"}
    )
