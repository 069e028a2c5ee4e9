from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from user_service.api import routes
from user_service.api.errors import install_error_handlers
from user_service.domain.account import Account
from user_service.domain.contracts import NewAccountRecord
from user_service.domain.errors import duplicate_email
from user_service.domain.service import AccountService
from user_service.security.passwords import PasswordHasher
from user_service.security.tokens import TokenIssuer

TEST_SECRET = "test-secret-with-at-least-thirty-two-bytes"
TEST_ISSUER = "user-service.test"


class FakeRepository:
    """In-memory repository mimicking the Postgres-backed behaviours."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self.writes = 0

    def find_by_email(self, email_id: str):
        return self._accounts.get(email_id)

    def list_emails(self) -> list[str]:
        return list(self._accounts)

    def insert(self, payload: NewAccountRecord) -> Account:
        if payload.email_id in self._accounts:
            raise duplicate_email()
        now = datetime.now(timezone.utc)
        account = Account(
            account_id=str(uuid.uuid4()),
            first_name=payload.first_name,
            last_name=payload.last_name,
            email_id=payload.email_id,
            password_hash=payload.password_hash,
            created_at=now,
            updated_at=now,
        )
        self._accounts[payload.email_id] = account
        self.writes += 1
        return account

    def update_profile(self, email_id: str, first_name: str, last_name: str) -> bool:
        account = self._accounts.get(email_id)
        if account is None:
            return False
        self._accounts[email_id] = Account(
            account_id=account.account_id,
            first_name=first_name,
            last_name=last_name,
            email_id=account.email_id,
            password_hash=account.password_hash,
            created_at=account.created_at,
            updated_at=datetime.now(timezone.utc),
        )
        self.writes += 1
        return True

    def update_password_hash(self, email_id: str, password_hash: str) -> bool:
        account = self._accounts.get(email_id)
        if account is None:
            return False
        self._accounts[email_id] = Account(
            account_id=account.account_id,
            first_name=account.first_name,
            last_name=account.last_name,
            email_id=account.email_id,
            password_hash=password_hash,
            created_at=account.created_at,
            updated_at=datetime.now(timezone.utc),
        )
        self.writes += 1
        return True

    def delete_by_email(self, email_id: str) -> int:
        if self._accounts.pop(email_id, None) is None:
            return 0
        self.writes += 1
        return 1


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, TEST_ISSUER, ttl_seconds=300)


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def service(repository, hasher, token_issuer) -> AccountService:
    return AccountService(repository, hasher, token_issuer)


@pytest.fixture
def api_client(service, token_issuer):
    """Provide a FastAPI test client with isolated state."""
    app = FastAPI()
    app.include_router(routes.router)
    install_error_handlers(app)
    app.state.account_service = service
    app.state.token_issuer = token_issuer

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client, service
