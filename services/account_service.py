# services/account_service.py
"""
Account lifecycle: signup, email verification, login, password reset and
account deletion.

Every mutation runs inside one session and one commit, so concurrent requests
against the same account never observe a half-written challenge. Inputs are
expected to be validated and normalized (lowercase email) by the caller.
"""
from __future__ import annotations
import uuid
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from db import SessionLocal
from models import User, Task
from auth.utils import hash_password, verify_password
from auth.otp import issue_otp, verify_otp
from auth.token import create_access_token
from auth.errors import (
    DuplicateAccount,
    UnknownAccount,
    InvalidCredentials,
    NotVerified,
    AlreadyVerified,
    InvalidOrExpiredCode,
    EmailDeliveryFailed,
)
from services import email_service

logger = logging.getLogger(__name__)

GENERIC_RESET_MESSAGE = "If an account exists with this email, an OTP has been sent"
GENERIC_RESEND_MESSAGE = "If an unverified account exists with this email, a new code has been sent"

# Compared against when the account is unknown so login costs the same either way
_DUMMY_HASH = hash_password("dummy-password-0")


def default_display_name(email: str) -> str:
    return email.split("@")[0].upper()


def _find_by_email(db, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def _session_payload(user: User) -> dict:
    return {"token": create_access_token(user.id), "user": user.public_dict()}


# ───────────── SIGNUP / VERIFICATION ──────────────────────────────────────────
def signup(email: str, password: str, name: Optional[str] = None, now: Optional[datetime] = None) -> dict:
    """
    Create an unverified account and email its verification code.

    All-or-nothing: if the code cannot be delivered the new row is deleted
    again and ``EmailDeliveryFailed`` is raised, so the caller can retry.
    """
    display_name = name or default_display_name(email)
    code, challenge = issue_otp(now)

    with SessionLocal() as db:
        if _find_by_email(db, email):
            raise DuplicateAccount()

        user = User(
            email=email,
            password_hash=hash_password(password),
            name=display_name,
            is_verified=False,
        )
        user.verification_challenge = challenge
        db.add(user)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise DuplicateAccount() from e
        user_id = user.id

    try:
        email_service.send_code_email(email, code, display_name, purpose="verification")
    except EmailDeliveryFailed:
        with SessionLocal() as db:
            db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
            db.commit()
        logger.warning(f"Signup rolled back for {user_id}: verification email not delivered")
        raise EmailDeliveryFailed(
            "Error sending verification email. Please check your email address and try again."
        )

    logger.info(f"Account created: {user_id}")
    return {"email": email, "isVerified": False}


def verify_email(email: str, code: str, now: Optional[datetime] = None) -> dict:
    with SessionLocal() as db:
        user = _find_by_email(db, email)
        if not user:
            raise UnknownAccount("Invalid email")
        if user.is_verified:
            raise AlreadyVerified()
        if not verify_otp(code, user.verification_challenge, now):
            raise InvalidOrExpiredCode()

        user.is_verified = True
        user.verification_challenge = None
        db.commit()
        payload = _session_payload(user)
        name = user.name

    logger.info(f"Email verified for account {payload['user']['id']}")
    # Fire-and-forget; the response never depends on it
    try:
        email_service.dispatch_welcome_email(email, name)
    except Exception:
        logger.exception("Could not queue welcome email")
    return payload


def resend_verification(email: str, now: Optional[datetime] = None) -> dict:
    """
    Re-issue the verification code for an unverified account.

    Answers the same way for unknown, verified and pending emails: the code is
    hashed before the lookup and delivery happens off the request path.
    """
    code, challenge = issue_otp(now)
    with SessionLocal() as db:
        user = _find_by_email(db, email)
        if user and not user.is_verified:
            user.verification_challenge = challenge
            db.commit()
            email_service.dispatch_code_email(email, code, user.name, purpose="verification")
    return {"email": email, "message": GENERIC_RESEND_MESSAGE}


# ───────────── LOGIN ──────────────────────────────────────────────────────────
def login(email: str, password: str) -> dict:
    """
    Unknown email and wrong password raise the same ``InvalidCredentials``;
    only a correct password on an unverified account reveals ``NotVerified``.
    """
    with SessionLocal() as db:
        user = _find_by_email(db, email)

    if not user:
        verify_password(password, _DUMMY_HASH)
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    if not user.is_verified:
        raise NotVerified(user.email)

    return _session_payload(user)


# ───────────── PASSWORD RESET ─────────────────────────────────────────────────
def forgot_password(email: str, now: Optional[datetime] = None) -> dict:
    """
    Start a reset flow. The response, and the work done before returning, is
    the same whether or not the account exists: the code is hashed either way
    and delivery happens off the request path, where a failure is only logged.
    """
    code, challenge = issue_otp(now)

    with SessionLocal() as db:
        user = _find_by_email(db, email)
        if user:
            user.reset_challenge = challenge
            db.commit()
            name = user.name

    if user:
        email_service.dispatch_code_email(email, code, name, purpose="password_reset")
    return {"email": email, "message": GENERIC_RESET_MESSAGE}


def check_reset_code(email: str, code: str, now: Optional[datetime] = None) -> None:
    """Validate a reset code without consuming it."""
    with SessionLocal() as db:
        user = _find_by_email(db, email)
    if not user or not verify_otp(code, user.reset_challenge, now):
        raise InvalidOrExpiredCode()


def reset_password(email: str, code: str, new_password: str, now: Optional[datetime] = None) -> None:
    with SessionLocal() as db:
        user = _find_by_email(db, email)
        if not user or not verify_otp(code, user.reset_challenge, now):
            raise InvalidOrExpiredCode()

        user.password_hash = hash_password(new_password)
        user.reset_challenge = None
        db.commit()
        logger.info(f"Password reset for account {user.id}")


# ───────────── ACCOUNT ────────────────────────────────────────────────────────
def get_account(user_id: uuid.UUID) -> User:
    with SessionLocal() as db:
        user = db.get(User, user_id)
    if not user:
        raise UnknownAccount()
    return user


def delete_account(user_id: uuid.UUID) -> int:
    """
    Remove the account row and every task it owns in one transaction.

    Returns the number of tasks removed. Nothing is deleted when the account
    is unknown.
    """
    with SessionLocal() as db:
        removed = db.query(Task).filter(Task.user_id == user_id).delete(synchronize_session=False)
        rows = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        if not rows:
            db.rollback()
            raise UnknownAccount()
        db.commit()
    logger.info(f"Account deleted: {user_id} ({removed} task(s))")
    return removed
