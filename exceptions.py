from fastapi import Request
from fastapi.responses import JSONResponse

from constants import INTERNAL_ERROR_MESSAGE, UNAUTHORIZED_MESSAGE


class AppError(Exception):
    """Failure with a status code and a message that is safe to show the client."""

    status_code: int = 500
    message: str = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingFieldError(AppError):
    status_code = 400
    message = "Required fields are missing."


class InvalidInputError(AppError):
    status_code = 400
    message = "Invalid request body."


class NoChangesError(AppError):
    status_code = 400
    message = "No changes provided."


class DuplicateEmailError(AppError):
    status_code = 400
    message = "User already exists."


class MissingQueryError(AppError):
    status_code = 400
    message = "Search query is required."


class UnauthorizedError(AppError):
    status_code = 401
    message = UNAUTHORIZED_MESSAGE

    # reason is for logs only, clients always get the generic message
    def __init__(self, reason: str = "Missing bearer token") -> None:
        self.reason = reason
        super().__init__()


class InvalidTokenError(UnauthorizedError):
    pass


class TokenExpiredError(UnauthorizedError):
    pass


class InvalidCredentialsError(AppError):
    status_code = 401
    message = "Invalid credentials."


class NotFoundError(AppError):
    status_code = 404
    message = "Not found."


class UserNotFoundError(NotFoundError):
    message = "User not found."


class InternalError(AppError):
    pass


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": True, "message": message}, status_code)


def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)
