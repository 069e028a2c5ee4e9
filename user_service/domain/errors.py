"""Error variants raised by the account workflows.

Each variant carries a fixed HTTP status and a stable ``code`` so the API layer
can render it without inspecting message text.
"""

from __future__ import annotations

from typing import ClassVar


class AccountError(Exception):
    """Base class for failures that are safe to report to the caller verbatim."""

    status_code: ClassVar[int] = 500
    code: ClassVar[str] = "internal"
    default_message: ClassVar[str] = "Internal Server Error. Please try again later."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid request."


class NotFound(AccountError):
    status_code = 400
    code = "not_found"
    default_message = "User does not exist!"


class Conflict(AccountError):
    status_code = 400
    code = "conflict"
    default_message = "Email Id already registered. Please login!"


class InvalidCredentials(AccountError):
    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid email Id or Password!"


class TokenError(AccountError):
    """Base for bearer token failures; all of them are 401 responses."""

    status_code = 401
    code = "token_error"
    default_message = "Invalid access token."


class TokenExpired(TokenError):
    code = "token_expired"
    default_message = "Access token has expired."


class TokenInvalid(TokenError):
    code = "token_invalid"
    default_message = "Access token is invalid."


class MalformedToken(TokenError):
    code = "token_malformed"
    default_message = "Access token is missing or malformed."


class Forbidden(AccountError):
    status_code = 403
    code = "forbidden"
    default_message = "Access denied: you may only act on your own account."


class Internal(AccountError):
    status_code = 500
    code = "internal"


def missing_names() -> ValidationError:
    return ValidationError("First Name and Last Name are required.")


def invalid_email() -> ValidationError:
    return ValidationError("Invalid Email Format.")


def weak_password() -> ValidationError:
    return ValidationError(
        "Password must be at least 8 characters, contain uppercase, lowercase, "
        "numbers, and special characters."
    )


def missing_old_password() -> ValidationError:
    return ValidationError("Old Password is required.")


def old_password_mismatch() -> ValidationError:
    return ValidationError("Old Password does not match")


def account_not_found() -> NotFound:
    return NotFound()


def duplicate_email() -> Conflict:
    return Conflict()


def invalid_credentials() -> InvalidCredentials:
    return InvalidCredentials()


def forbidden() -> Forbidden:
    return Forbidden()
