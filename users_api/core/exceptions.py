"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class UserNotFoundError(NotFoundException):
    """No user matches the requested external id."""

    def __init__(self) -> None:
        super().__init__("User not found")


class InvalidUserIdError(BadRequestException):
    """Path identifier is not a valid UUID."""

    def __init__(self, raw_value: str) -> None:
        super().__init__(f"Invalid user id: {raw_value}")
        self.raw_value = raw_value


class AddingUserError(AppException):
    def __init__(self) -> None:
        super().__init__("Error adding user")


class UpdatingUserError(AppException):
    def __init__(self) -> None:
        super().__init__("Error updating user")


class DeletingUserError(AppException):
    def __init__(self) -> None:
        super().__init__("Error deleting user")


class DatabaseError(AppException):
    """Driver, pool or query failure reported by the database layer."""

    def __init__(self, detail: str = "unexpected failure") -> None:
        super().__init__(f"Database error: {detail}")
        self.detail = detail
