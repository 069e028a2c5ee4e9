from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Account:
    """Aggregate root for a registered user identity."""

    account_id: str
    first_name: str
    last_name: str
    email_id: str
    password_hash: str
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(slots=True)
class AccountProfile:
    """Outward projection of an account; never carries the password hash."""

    account_id: str
    first_name: str
    last_name: str
    email_id: str
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountProfile":
        return cls(
            account_id=account.account_id,
            first_name=account.first_name,
            last_name=account.last_name,
            email_id=account.email_id,
            created_at=account.created_at,
        )
