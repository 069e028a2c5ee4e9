"""HTTP route definitions for the user service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Request, status
from pydantic import BaseModel, ConfigDict, Field

from ..domain.account import AccountProfile
from ..domain.contracts import ChangePasswordInput, EditProfileInput, RegisterAccountInput
from ..domain.service import AccountService
from ..security.tokens import TokenIssuer, parse_bearer

router = APIRouter(prefix="/users/v1")


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UserResponse(_CamelModel):
    """Serialised representation of an account; no password material."""

    user_id: str = Field(..., alias="userId")
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email_id: str = Field(..., alias="emailId")
    created_at: str = Field(..., alias="createdAt")

    @classmethod
    def from_domain(cls, profile: AccountProfile) -> "UserResponse":
        """Build a response model from the domain projection."""
        return cls(
            user_id=profile.account_id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email_id=profile.email_id,
            created_at=profile.created_at.isoformat(),
        )


class RegisterRequest(_CamelModel):
    """Registration payload; fields are checked by the service, not the schema."""

    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email_id: str | None = Field(default=None, alias="emailId")
    password: str | None = None


class LoginRequest(_CamelModel):
    email_id: str | None = Field(default=None, alias="emailId")
    password: str | None = None


class EmailRequest(_CamelModel):
    email_id: str | None = Field(default=None, alias="emailId")


class EditRequest(_CamelModel):
    email_id: str | None = Field(default=None, alias="emailId")
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")


class ChangePasswordRequest(_CamelModel):
    email_id: str | None = Field(default=None, alias="emailId")
    old_password: str | None = Field(default=None, alias="oldPassword")
    new_password: str | None = Field(default=None, alias="newPassword")


class MessageResponse(_CamelModel):
    status: str = "Success"
    message: str
    user_id: str = Field(..., alias="userId")


class LoginResponse(_CamelModel):
    """Profile fields plus the bearer token issued at login."""

    status: str = "Success"
    message: str = "User Login Success"
    user_id: str = Field(..., alias="userId")
    email_id: str = Field(..., alias="emailId")
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    access_token: str = Field(..., alias="accessToken")
    token_type: str = Field(default="bearer", alias="tokenType")
    expires_in: int = Field(..., alias="expiresIn")


class ViewResponse(_CamelModel):
    status: str = "Success"
    user: UserResponse


class EmailListResponse(_CamelModel):
    status: str = "Success"
    user: list[str]


class DeleteOutcome(_CamelModel):
    acknowledged: bool
    deleted_count: int = Field(..., alias="deletedCount")


class DeleteResponse(_CamelModel):
    status: str = "Success"
    message: str = "User Account deleted!"
    response: DeleteOutcome


def get_service(request: Request) -> AccountService:
    """Resolve the `AccountService` stored on the FastAPI application state."""
    service: AccountService = request.app.state.account_service
    return service


def get_caller_email(
    request: Request,
    authorization: str | None = Header(default=None),
) -> str:
    """Verify the bearer token and return the email identity it was issued for."""
    issuer: TokenIssuer = request.app.state.token_issuer
    return issuer.verify(parse_bearer(authorization))


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    service: AccountService = Depends(get_service),
) -> MessageResponse:
    """Create an account from validated names, email and password."""
    account = service.register(
        RegisterAccountInput(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email_id=payload.email_id,
            password=payload.password,
        )
    )
    return MessageResponse(message="User Registration Successful", user_id=account.account_id)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    service: AccountService = Depends(get_service),
) -> LoginResponse:
    """Exchange email and password for an access token."""
    result = service.login(payload.email_id, payload.password)
    profile = result.profile
    return LoginResponse(
        user_id=profile.account_id,
        email_id=profile.email_id,
        first_name=profile.first_name,
        last_name=profile.last_name,
        access_token=result.access_token,
        expires_in=result.expires_in,
    )


@router.post("/view", response_model=ViewResponse)
def view_user(
    payload: EmailRequest,
    caller_email: str = Depends(get_caller_email),
    service: AccountService = Depends(get_service),
) -> ViewResponse:
    """Return the caller's own profile."""
    profile = service.view(caller_email, payload.email_id)
    return ViewResponse(user=UserResponse.from_domain(profile))


@router.get("/emails", response_model=EmailListResponse)
def list_emails(
    caller_email: str = Depends(get_caller_email),
    service: AccountService = Depends(get_service),
) -> EmailListResponse:
    """List every registered email identifier."""
    return EmailListResponse(user=service.list_emails())


@router.delete("/delete", response_model=DeleteResponse)
def delete_user(
    payload: EmailRequest,
    caller_email: str = Depends(get_caller_email),
    service: AccountService = Depends(get_service),
) -> DeleteResponse:
    result = service.delete(caller_email, payload.email_id)
    return DeleteResponse(
        response=DeleteOutcome(acknowledged=result.acknowledged, deleted_count=result.deleted_count)
    )


@router.post("/edit", response_model=MessageResponse)
def edit_user(
    payload: EditRequest,
    caller_email: str = Depends(get_caller_email),
    service: AccountService = Depends(get_service),
) -> MessageResponse:
    """Replace the caller's first and last name; the email cannot change."""
    account = service.edit(
        caller_email,
        EditProfileInput(
            email_id=payload.email_id,
            first_name=payload.first_name,
            last_name=payload.last_name,
        ),
    )
    return MessageResponse(message="User update Success", user_id=account.account_id)


@router.post("/password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    caller_email: str = Depends(get_caller_email),
    service: AccountService = Depends(get_service),
) -> MessageResponse:
    """Replace the caller's password after checking the current one."""
    account = service.change_password(
        caller_email,
        ChangePasswordInput(
            email_id=payload.email_id,
            old_password=payload.old_password,
            new_password=payload.new_password,
        ),
    )
    return MessageResponse(message="Password update Success", user_id=account.account_id)
