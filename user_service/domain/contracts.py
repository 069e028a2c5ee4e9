"""Domain-level request contracts shared by multiple layers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RegisterAccountInput:
    """Raw registration fields; validated by the service before any write."""

    first_name: str | None
    last_name: str | None
    email_id: str | None
    password: str | None


@dataclass(slots=True)
class NewAccountRecord:
    """Validated values handed to the repository for insertion."""

    first_name: str
    last_name: str
    email_id: str
    password_hash: str


@dataclass(slots=True)
class EditProfileInput:
    email_id: str | None
    first_name: str | None
    last_name: str | None


@dataclass(slots=True)
class ChangePasswordInput:
    email_id: str | None
    old_password: str | None
    new_password: str | None


@dataclass(slots=True)
class DeleteResult:
    """Outcome of an account deletion."""

    acknowledged: bool
    deleted_count: int
