"""Domain errors raised by the service layer and rendered by the HTTP layer."""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors that map to a client-visible status and message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConflictError(ServiceError):
    """Raised when a username or email is already taken."""

    status_code = status.HTTP_409_CONFLICT


class NotFoundError(ServiceError):
    """Raised when a user or post does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(ServiceError):
    """Raised when the caller does not own the record it tries to change."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidInputError(ServiceError):
    """Raised for malformed ids, dangling owner references and failed writes."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ServiceError):
    """Raised for bad credentials and invalid, expired or wrong-type tokens."""

    status_code = status.HTTP_401_UNAUTHORIZED


class InternalError(ServiceError):
    """Raised when a store failure must not leak driver detail to the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
