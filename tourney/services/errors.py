from typing import Any, List, Optional


class TourneyError(Exception):
    """Base for errors that the API layer turns into `{"message", "errors"}` responses."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class InvalidInputError(TourneyError):
    status_code = 400
    default_message = "Invalid request data"

    @classmethod
    def from_validation_error(cls, message: str, exc) -> "InvalidInputError":
        """Wrap a pydantic ValidationError, keeping its per-field error list."""
        return cls(message, errors=exc.errors(include_url=False, include_context=False))


class NotFoundError(TourneyError):
    status_code = 404
    default_message = "Not found"


class TournamentNotFoundError(NotFoundError):
    default_message = "Tournament not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class TournamentFullError(TourneyError):
    status_code = 400
    default_message = "Tournament is full"


class RegistrationClosedError(TourneyError):
    status_code = 400
    default_message = "Tournament registration is closed"


class InvalidStatusTransitionError(TourneyError):
    status_code = 400
    default_message = "Invalid tournament status transition"


class DuplicateUsernameError(TourneyError):
    status_code = 409
    default_message = "Username already exists"


class InvalidCredentialsError(TourneyError):
    status_code = 401
    default_message = "Invalid username or password"


class InternalError(TourneyError):
    pass
