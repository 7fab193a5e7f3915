"""Account lifecycle: registration, email activation, profile update and removal."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import transaction
from app.core.exceptions import (
    Conflict,
    NotFound,
    PasswordMismatch,
    PermissionDenied,
    Unauthorized,
)
from app.core.security import PasswordHasher, codes_match, generate_activation_code
from app.models import Account
from app.schemas.auth import Identity, RegisterRequest
from app.schemas.users import UpdateAccountRequest
from app.services.mail import Mailer

logger = logging.getLogger(__name__)


def identity_for(account: Account) -> Identity:
    """Identity built from one read of the account row."""
    return Identity(account_id=account.id, username=account.username, role=account.role)


def _reject_admin(account: Account) -> None:
    # Admin accounts are provisioned with the create_user script, not self-managed.
    # Checked on the row: the role in an access token can be stale.
    if account.role == "admin":
        raise PermissionDenied()


def get_account(session: Session, account_id: int) -> Account:
    account = session.get(Account, account_id)
    if account is None:
        raise NotFound("Account not found.")
    return account


def get_account_by_username(session: Session, username: str) -> Account | None:
    return session.query(Account).filter(Account.username == username).first()


def register(
    session: Session,
    hasher: PasswordHasher,
    body: RegisterRequest,
    code_length: int,
) -> Account:
    """Create an inactive account holding a fresh activation code (mailed by the caller)."""
    if body.password != body.confirm_password:
        raise PasswordMismatch()

    email = str(body.email).lower()
    existing = (
        session.query(Account)
        .filter(or_(Account.username == body.username, Account.email == email))
        .first()
    )
    if existing is not None:
        raise Conflict("Username or email is already registered.")

    code = generate_activation_code(code_length)
    account = Account(
        username=body.username,
        email=email,
        password_hash=hasher.hash(body.password),
        role="user",
        activated=False,
        activation_code=code,
    )
    try:
        with transaction(session):
            session.add(account)
    except IntegrityError as e:
        raise Conflict("Username or email is already registered.", cause=e) from e
    session.refresh(account)
    logger.info("Account registered: id=%s", account.id)
    return account


def resend_activation(
    session: Session,
    mailer: Mailer,
    account_id: int,
    code_length: int,
) -> None:
    """Replace the pending activation code and mail it again."""
    with transaction(session):
        account = get_account(session, account_id)
        if account.activated:
            raise Conflict("Account is already activated.")
        code = generate_activation_code(code_length)
        account.activation_code = code
    mailer.send_activation_code(account.email, account.username, code)


def activate(session: Session, account_id: int, code: str) -> Account:
    with transaction(session):
        account = get_account(session, account_id)
        if account.activated:
            raise Conflict("Account is already activated.")
        if not codes_match(code, account.activation_code):
            raise Unauthorized("Invalid activation code.")
        account.activated = True
        account.activation_code = None
    logger.info("Account activated: id=%s", account_id)
    return account


def update_profile(
    session: Session,
    hasher: PasswordHasher,
    account_id: int,
    body: UpdateAccountRequest,
) -> Account:
    """
    Change username and/or password from a single read of the account.

    The returned row is the post-update state; tokens re-issued from it never
    mix an old username with a new password or the reverse.
    """
    try:
        with transaction(session):
            account = session.get(Account, account_id)
            if account is None:
                raise Unauthorized("Account no longer exists.")
            _reject_admin(account)

            if body.password:
                if not body.prev_password or not hasher.verify(
                    body.prev_password, account.password_hash
                ):
                    raise PasswordMismatch("Current password is incorrect.")
                if body.password != body.confirm_password:
                    raise PasswordMismatch()
                account.password_hash = hasher.hash(body.password)

            if body.username and body.username != account.username:
                taken = get_account_by_username(session, body.username)
                if taken is not None:
                    raise Conflict("Username is already taken.")
                account.username = body.username
    except IntegrityError as e:
        raise Conflict("Username is already taken.", cause=e) from e

    session.refresh(account)
    logger.info("Account updated: id=%s", account_id)
    return account


def delete_account(session: Session, account_id: int) -> None:
    """Remove the account. Its posts and comments keep creator and stay member-owned."""
    with transaction(session):
        account = session.get(Account, account_id)
        if account is None:
            raise Unauthorized("Account no longer exists.")
        _reject_admin(account)
        session.delete(account)
    logger.info("Account deleted: id=%s", account_id)
