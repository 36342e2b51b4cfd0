"""Service exceptions shared by the asset and user services."""


class ServiceError(Exception):
    """Base exception for service errors."""
    pass


class NotFoundError(ServiceError):
    """Requested user or asset does not exist."""
    pass


class AuthorizationError(ServiceError):
    """Caller does not own the asset it tries to change."""
    pass


class BadRequestError(ServiceError):
    """Request cannot be applied to the current state."""
    pass


class InvalidQueryError(BadRequestError):
    """Malformed filter or pagination input."""
    pass
