"""
Service errors

Services raise these; the application renders them as the standard
error envelope with the matching HTTP status code.
"""


class ServiceError(Exception):
    """Base class for failures that map to an HTTP response"""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class UnauthorizedError(ServiceError):
    """Missing, malformed or expired credential"""
    status_code = 401
    default_message = "Unauthorized access"


class ForbiddenError(ServiceError):
    """Authenticated, but the role or ownership does not allow it"""
    status_code = 403
    default_message = "Forbidden access"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class BadRequestError(ServiceError):
    status_code = 400
    default_message = "Bad request"


class DuplicateSubmissionError(BadRequestError):
    default_message = "You have already submitted to this contest"


class InvalidAmountError(BadRequestError):
    default_message = "Invalid payment amount"


class UpstreamError(ServiceError):
    """Payment provider call failed"""
    status_code = 500
    default_message = "Payment provider request failed"
