"""Account service orchestrating validation, hashing, authorization and persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .account import Account, AccountProfile
from .contracts import (
    ChangePasswordInput,
    DeleteResult,
    EditProfileInput,
    NewAccountRecord,
    RegisterAccountInput,
)
from . import errors
from ..repository import AccountRepository
from ..security.guard import require_self
from ..security.passwords import PasswordHasher
from ..security.tokens import TokenIssuer
from ..security.validation import email_validation, not_null, password_validation

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LoginResult:
    """Profile fields and bearer token returned after a successful login."""

    profile: AccountProfile
    access_token: str
    expires_in: int


class AccountService:
    """Account workflows; every call on an existing account is self-only."""

    def __init__(
        self,
        repository: AccountRepository,
        hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        """Store dependencies used to orchestrate persistence and token issuance."""
        self._repository = repository
        self._hasher = hasher
        self._token_issuer = token_issuer

    def register(self, payload: RegisterAccountInput) -> Account:
        """Validate and persist a new account; nothing is written on failure."""
        if not not_null(payload.first_name) or not not_null(payload.last_name):
            raise errors.missing_names()
        if not_null(payload.email_id) and self._repository.find_by_email(payload.email_id):
            raise errors.duplicate_email()
        if not email_validation(payload.email_id):
            raise errors.invalid_email()
        if not password_validation(payload.password):
            raise errors.weak_password()

        account = self._repository.insert(
            NewAccountRecord(
                first_name=payload.first_name,
                last_name=payload.last_name,
                email_id=payload.email_id,
                password_hash=self._hasher.hash(payload.password),
            )
        )
        logger.info("account registered id=%s", account.account_id)
        return account

    def login(self, email_id: str | None, password: str | None) -> LoginResult:
        """Check credentials and issue an access token.

        Unknown emails and wrong passwords raise the same ``InvalidCredentials``
        error, and both spend one hash verification.
        """
        password = password or ""
        account = self._repository.find_by_email(email_id) if not_null(email_id) else None
        if account is None:
            self._hasher.verify_dummy(password)
            logger.warning("login failed")
            raise errors.invalid_credentials()
        if not self._hasher.verify(password, account.password_hash):
            logger.warning("login failed")
            raise errors.invalid_credentials()

        issued = self._token_issuer.issue(account.email_id)
        logger.info("login succeeded id=%s", account.account_id)
        return LoginResult(
            profile=AccountProfile.from_account(account),
            access_token=issued.token,
            expires_in=issued.expires_in,
        )

    def view(self, caller_email: str, email_id: str | None) -> AccountProfile:
        """Return the caller's own profile."""
        require_self(caller_email, email_id)
        return AccountProfile.from_account(self._require_account(email_id))

    def list_emails(self) -> list[str]:
        """Return every registered email identifier."""
        return self._repository.list_emails()

    def edit(self, caller_email: str, payload: EditProfileInput) -> Account:
        """Replace the caller's display names."""
        require_self(caller_email, payload.email_id)
        account = self._require_account(payload.email_id)
        if not not_null(payload.first_name) or not not_null(payload.last_name):
            raise errors.missing_names()

        if not self._repository.update_profile(account.email_id, payload.first_name, payload.last_name):
            raise errors.account_not_found()
        logger.info("account profile updated id=%s", account.account_id)
        account.first_name = payload.first_name
        account.last_name = payload.last_name
        return account

    def change_password(self, caller_email: str, payload: ChangePasswordInput) -> Account:
        """Replace the caller's password after checking the current one."""
        require_self(caller_email, payload.email_id)
        account = self._require_account(payload.email_id)
        if not not_null(payload.old_password):
            raise errors.missing_old_password()
        if not password_validation(payload.new_password):
            raise errors.weak_password()
        if not self._hasher.verify(payload.old_password, account.password_hash):
            raise errors.old_password_mismatch()

        new_hash = self._hasher.hash(payload.new_password)
        if not self._repository.update_password_hash(account.email_id, new_hash):
            raise errors.account_not_found()
        logger.info("account password changed id=%s", account.account_id)
        account.password_hash = new_hash
        return account

    def delete(self, caller_email: str, email_id: str | None) -> DeleteResult:
        """Remove the caller's account."""
        require_self(caller_email, email_id)
        account = self._require_account(email_id)
        deleted = self._repository.delete_by_email(account.email_id)
        logger.info("account deleted id=%s", account.account_id)
        return DeleteResult(acknowledged=True, deleted_count=deleted)

    def _require_account(self, email_id: str | None) -> Account:
        account = self._repository.find_by_email(email_id) if email_id else None
        if account is None:
            raise errors.account_not_found()
        return account
