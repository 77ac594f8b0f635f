"""
Core module for application infrastructure.
"""
from app.core.exceptions import (
    ServiceError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    BadRequestError,
    DuplicateSubmissionError,
    InvalidAmountError,
    UpstreamError
)
from app.core.logging import setup_logging

__all__ = [
    "ServiceError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "BadRequestError",
    "DuplicateSubmissionError",
    "InvalidAmountError",
    "UpstreamError",
    "setup_logging"
]
