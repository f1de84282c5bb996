"""
Account errors and their HTTP mapping.
Every error is terminal for the request: the handler turns it into
{"error": <code>} with the error's status code.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

VALIDATION_FAILED = "validation_failed"
EMAIL_ALREADY_EXISTS = "email_already_exists"
PHONE_ALREADY_EXISTS = "phone_already_exists"
PASSWORD_NOT_MATCH = "password_not_match"
USER_NOT_FOUND = "user_not_found"


class AccountError(Exception):
    """Base class for account workflow failures."""

    code = "account_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, code: str | None = None):
        if code is not None:
            self.code = code
        super().__init__(self.code)


class ValidationFailedError(AccountError):
    """Input did not match the schema. reasons name what failed (not sent on the wire)."""

    code = VALIDATION_FAILED

    def __init__(self, reasons: tuple[str, ...] = ()):
        super().__init__()
        self.reasons = tuple(reasons)


class ConflictError(AccountError):
    """email or phone already belongs to another account."""

    def __init__(self, field: str):
        super().__init__(f"{field}_already_exists")
        self.field = field


class AuthError(AccountError):
    code = PASSWORD_NOT_MATCH


class UserNotFoundError(AccountError):
    code = USER_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


def error_body(code: str) -> dict:
    return {"error": code}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AccountError)
    async def account_error_handler(request: Request, exc: AccountError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.code))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Body was not a JSON object; same generic code as schema failures.
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(VALIDATION_FAILED),
        )
