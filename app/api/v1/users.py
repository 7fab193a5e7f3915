"""Profile of the logged-in member: view, update, delete."""

from fastapi import APIRouter, Response

from app.api.guards import Container, DbSession, MemberIdentity
from app.api.v1.auth import issue_session
from app.schemas.auth import MessageResponse, TokenResponse
from app.schemas.users import AccountResponse, UpdateAccountRequest
from app.services import accounts

router = APIRouter()


@router.get("", response_model=AccountResponse)
def get_profile(identity: MemberIdentity, db: DbSession) -> AccountResponse:
    account = accounts.get_account(db, identity.account_id)
    return AccountResponse.model_validate(account)


@router.patch("", response_model=TokenResponse)
def update_profile(
    body: UpdateAccountRequest,
    identity: MemberIdentity,
    response: Response,
    db: DbSession,
    container: Container,
) -> TokenResponse:
    """Change username and/or password; returns tokens for the updated account. Not for admins."""
    account = accounts.update_profile(db, container.hasher, identity.account_id, body)
    return issue_session(container, account, response)


@router.delete("", response_model=MessageResponse)
def delete_profile(
    identity: MemberIdentity,
    response: Response,
    db: DbSession,
    container: Container,
) -> MessageResponse:
    accounts.delete_account(db, identity.account_id)
    container.cookies.clear_refresh_cookie(response)
    return MessageResponse(message="Account deleted.")
