"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class InsufficientPoints(AppError):
    """Raised when a redemption costs more than the user's balance."""

    def __init__(self, message="Insufficient points."):
        """Initialize the error."""
        super().__init__(message, 400)


class UnauthorizedError(AppError):
    """Raised when a request carries no valid credential."""

    def __init__(self, message="Authentication required."):
        """Initialize the error."""
        super().__init__(message, 401)


class ForbiddenError(AppError):
    """Raised when an authenticated user may not act on a resource."""

    def __init__(self, message="You do not have permission to do that."):
        """Initialize the error."""
        super().__init__(message, 403)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class DuplicateResourceError(AppError):
    """Raised when trying to create a resource that already exists."""

    def __init__(self, message="Resource already exists."):
        """Initialize the error."""
        super().__init__(message, 409)


class ConcurrentUpdateError(AppError):
    """Raised when a store transaction keeps losing to concurrent writers."""

    def __init__(self, message="The resource was modified concurrently."):
        """Initialize the error."""
        super().__init__(message, 409)


class UpstreamUnavailable(AppError):
    """Raised when a third-party provider is unconfigured or failing."""

    def __init__(self, message="Upstream service unavailable."):
        """Initialize the error."""
        super().__init__(message, 502)
