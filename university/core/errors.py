"""
Policy error taxonomy.

Every error is an ``HTTPException`` so FastAPI routes it through the single
handler registered in ``university.main``. ``detail`` is a string for
``{"error": ...}`` bodies and a list of field errors for ``{"errors": [...]}``.
"""

from fastapi import HTTPException, status


class PolicyError(HTTPException):
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message=None, headers: dict | None = None):
        super().__init__(
            status_code=self.http_status,
            detail=message if message is not None else self.default_message,
            headers=headers,
        )


class ValidationFailed(PolicyError):
    def __init__(self, errors: list[dict]):
        super().__init__(list(errors))

    @property
    def errors(self) -> list[dict]:
        return self.detail


class InvalidReference(PolicyError):
    default_message = "Invalid reference"


class DuplicateEntity(PolicyError):
    default_message = "Duplicate entry"


class HasDependents(PolicyError):
    default_message = "Record has dependent records"


class NoOp(PolicyError):
    default_message = "No fields to update"


class Unauthenticated(PolicyError):
    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"

    def __init__(self, message=None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidToken(Unauthenticated):
    default_message = "Invalid token"


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid credentials"


class Forbidden(PolicyError):
    http_status = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized access"


class NotFound(PolicyError):
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class PersistenceFailure(PolicyError):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error"
