"""Error taxonomy for the board API.

Every error here is terminal for the request and is rendered by the handler in
app.main as a 4xx (or 502 for mail delivery) carrying the `code` tag and a
human-readable message. Anything else is a server error.
"""

from fastapi import status


class BoardError(Exception):
    """Base class for all expected, client-visible failures."""

    code: str = "BoardError"
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed."

    def __init__(self, message: str | None = None, cause: Exception | None = None) -> None:
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)


class Unauthorized(BoardError):
    code = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated."


class TokenExpired(Unauthorized):
    code = "TokenExpired"
    default_message = "Token has expired."


class TokenInvalid(Unauthorized):
    code = "TokenInvalid"
    default_message = "Token is invalid."


class TokenTypeMismatch(Unauthorized):
    code = "TokenTypeMismatch"
    default_message = "Token cannot be used here."


class PermissionDenied(BoardError):
    code = "PermissionDenied"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Permission denied."


class Unregistered(BoardError):
    code = "Unregistered"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "This action requires an account."


class AlreadyRated(BoardError):
    code = "AlreadyRated"
    status_code = status.HTTP_409_CONFLICT
    default_message = "You have already rated this post."


class PasswordMismatch(BoardError):
    code = "PasswordMismatch"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Passwords do not match."


class InvalidInput(BoardError):
    code = "InvalidInput"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input."


class NotFound(BoardError):
    code = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class Conflict(BoardError):
    code = "Conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict."


class MailDeliveryError(BoardError):
    """Raised when the SMTP server cannot be reached or rejects the message."""

    code = "MailDeliveryError"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Could not deliver email."
