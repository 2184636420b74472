"""Domain exceptions shared by every portal service.

Service-layer functions raise these; the gateway's exception handlers turn
them into ``{"msg": ...}`` responses with the matching status code.
"""

from typing import Optional

from fastapi import status


class ChurchPortalError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong, try again later"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ChurchPortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ValidationError(ChurchPortalError):
    """Missing or malformed field, bad reference, or time-ordering violation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(ChurchPortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication invalid"


class ForbiddenError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized to access this route"


class ConflictError(ChurchPortalError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflicting request"
