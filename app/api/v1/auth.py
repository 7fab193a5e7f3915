"""Registration, email activation, login, token refresh and logout."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.guards import AccessIdentity, Container, DbSession, local_guard, refresh_guard
from app.core.container import ServiceContainer
from app.core.exceptions import MailDeliveryError, Unauthorized
from app.models import Account
from app.schemas.auth import (
    Claims,
    EmailActivateRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from app.services import accounts
from app.services.accounts import identity_for

logger = logging.getLogger(__name__)

router = APIRouter()


def _pending_account_id(request: Request, container: ServiceContainer) -> int:
    """Account named by the registration cookie set at /register."""
    token = container.cookies.read_registration_cookie(request)
    if not token:
        raise Unauthorized("Registration session missing or expired.")
    return container.tokens.verify(token, "activation").account_id


def issue_session(container: ServiceContainer, account: Account, response: Response) -> TokenResponse:
    """Access token in the body, refresh token in the cookie (login and profile update)."""
    identity = identity_for(account)
    access_token, expires_at = container.tokens.issue_access_token(identity)
    container.cookies.set_refresh_cookie(response, container.tokens.issue_refresh_token(identity))
    return TokenResponse(
        username=identity.username,
        access_token=access_token,
        access_token_expires=expires_at,
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    response: Response,
    db: DbSession,
    container: Container,
) -> RegisterResponse:
    """
    Create an inactive account and email its activation code.

    Sets the registration cookie used by /email/send and /email/activate. If
    the mail cannot be delivered the account still exists; the client can
    retry with GET /email/send.
    """
    settings = container.settings
    account = accounts.register(db, container.hasher, body, settings.ACTIVATION_CODE_LENGTH)
    container.cookies.set_registration_cookie(
        response, container.tokens.issue_activation_token(identity_for(account))
    )

    mail_sent = True
    try:
        container.mailer.send_activation_code(account.email, account.username, account.activation_code)
    except MailDeliveryError:
        logger.warning("Activation mail not delivered for account id=%s", account.id)
        mail_sent = False

    return RegisterResponse(
        id=account.id,
        username=account.username,
        email=account.email,
        activation_mail_sent=mail_sent,
    )


@router.get("/email/send", response_model=MessageResponse)
def send_activation_email(
    request: Request,
    db: DbSession,
    container: Container,
) -> MessageResponse:
    """Resend the activation code (new code, old one stops working)."""
    account_id = _pending_account_id(request, container)
    accounts.resend_activation(
        db, container.mailer, account_id, container.settings.ACTIVATION_CODE_LENGTH
    )
    return MessageResponse(message="Activation email sent.")


@router.post("/email/activate", response_model=MessageResponse)
def activate_email(
    request: Request,
    body: EmailActivateRequest,
    response: Response,
    db: DbSession,
    container: Container,
) -> MessageResponse:
    """Activate the pending account and clear session cookies."""
    account_id = _pending_account_id(request, container)
    accounts.activate(db, account_id, body.code)
    container.cookies.clear_registration_cookie(response)
    container.cookies.clear_refresh_cookie(response)
    return MessageResponse(message="Account activated.")


@router.post("/login", response_model=TokenResponse)
def login(
    account: Annotated[Account, Depends(local_guard)],
    response: Response,
    container: Container,
) -> TokenResponse:
    """
    Authenticate with username and password.

    Returns the access token (send as `Authorization: Bearer <access_token>`);
    the refresh token is set as an HTTP-only cookie.
    """
    logger.info("Login: account id=%s", account.id)
    return issue_session(container, account, response)


@router.get("/refresh", response_model=TokenResponse)
def refresh(
    claims: Annotated[Claims, Depends(refresh_guard)],
    db: DbSession,
    container: Container,
) -> TokenResponse:
    """
    New access token from the refresh cookie.

    Username and role come from the account as it is now, not from the
    refresh token. The refresh token itself is not rotated.
    """
    account = db.get(Account, claims.account_id)
    if account is None:
        raise Unauthorized("Account no longer exists.")
    access_token, expires_at = container.tokens.issue_access_token(identity_for(account))
    return TokenResponse(
        username=account.username,
        access_token=access_token,
        access_token_expires=expires_at,
    )


@router.get("/logout", response_model=MessageResponse)
def logout(
    _identity: AccessIdentity,
    response: Response,
    container: Container,
) -> MessageResponse:
    """Clear the refresh cookie. The token itself stays valid until it expires."""
    container.cookies.clear_refresh_cookie(response)
    return MessageResponse(message="Logged out.")
