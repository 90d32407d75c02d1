"""
Custom exception classes for the Property Marketplace API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        detail = f"{resource} not found"
        if resource_id:
            detail += f" with ID: {resource_id}"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class UnauthorizedError(APIException):
    """Authentication required exception."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenError(APIException):
    """Access forbidden exception."""

    def __init__(self, detail: str = "Access forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class ConflictError(APIException):
    """Resource conflict exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT"
        )


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


# Authentication specific exceptions
class InvalidCredentialsError(UnauthorizedError):
    """Unknown email and wrong password share this error."""

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail)
        self.error_code = "INVALID_CREDENTIALS"


class InvalidTokenError(UnauthorizedError):
    """Malformed, tampered and expired tokens all raise this."""

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)
        self.error_code = "INVALID_TOKEN"


class InactiveUserError(ForbiddenError):
    """Inactive user account exception."""

    def __init__(self, detail: str = "Account is deactivated"):
        super().__init__(detail)
        self.error_code = "INACTIVE_USER"


class InsufficientPermissionsError(ForbiddenError):
    """Insufficient permissions exception."""

    def __init__(self, detail: str = "Access denied. Insufficient permissions."):
        super().__init__(detail)
        self.error_code = "INSUFFICIENT_PERMISSIONS"


class DuplicateEmailError(ConflictError):
    """Email is already registered."""

    def __init__(self, detail: str = "Email already registered"):
        super().__init__(detail)
        self.error_code = "DUPLICATE_EMAIL"


class PasswordPolicyError(BadRequestError):
    """Password does not satisfy the credential policy."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.error_code = "PASSWORD_POLICY_VIOLATION"


class InvalidRoleError(BadRequestError):
    """Role outside the fixed role set."""

    def __init__(self, detail: str = "Invalid role"):
        super().__init__(detail)
        self.error_code = "INVALID_ROLE"


class CannotDeleteSelfError(BadRequestError):
    """Admins may not delete their own account."""

    def __init__(self, detail: str = "Cannot delete your own account"):
        super().__init__(detail)
        self.error_code = "CANNOT_DELETE_SELF"


# Listing specific exceptions
class ListingNotFoundError(NotFoundError):
    """Listing not found exception."""

    def __init__(self, listing_id: Optional[str] = None):
        super().__init__("Listing", listing_id)
        self.error_code = "LISTING_NOT_FOUND"


class ListingNotActiveError(BadRequestError):
    """Listing exists but does not accept inquiries."""

    def __init__(self, detail: str = "Listing is not active"):
        super().__init__(detail)
        self.error_code = "LISTING_NOT_ACTIVE"


class NoFieldsToUpdateError(BadRequestError):
    """A partial update carried no fields."""

    def __init__(self, detail: str = "No fields to update"):
        super().__init__(detail)
        self.error_code = "NO_FIELDS_TO_UPDATE"


# Favorite specific exceptions
class AlreadyFavoritedError(ConflictError):
    """The (user, listing) pair already exists."""

    def __init__(self, detail: str = "Already in favorites"):
        super().__init__(detail)
        self.error_code = "ALREADY_FAVORITED"


class FavoriteNotFoundError(NotFoundError):
    """Favorite not found exception."""

    def __init__(self):
        super().__init__("Favorite")
        self.error_code = "FAVORITE_NOT_FOUND"


# Service unavailable exceptions
class ServiceUnavailableError(APIException):
    """Service unavailable exception."""

    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code="SERVICE_UNAVAILABLE"
        )
