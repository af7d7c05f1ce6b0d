"""One-time codes for email verification and password reset.

Codes are four decimal digits in 1000-9999, so a leading zero never occurs.
Only the bcrypt hash of a code is ever stored; the plaintext leaves the
process once, inside the outbound email.
"""
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple

from auth.utils import hash_password, verify_password

OTP_TTL_MINUTES = 10


@dataclass(frozen=True)
class Challenge:
    hashed_code: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.utcnow()


def generate_code() -> str:
    return str(1000 + secrets.randbelow(9000))


def issue_otp(now: Optional[datetime] = None) -> Tuple[str, Challenge]:
    """
    Create a fresh code and the challenge that backs it.

    Returns the plaintext code (to be emailed, never persisted) together with
    the hashed challenge expiring ``OTP_TTL_MINUTES`` from ``now``.
    """
    code = generate_code()
    issued_at = now or _utcnow()
    challenge = Challenge(
        hashed_code=hash_password(code),
        expires_at=issued_at + timedelta(minutes=OTP_TTL_MINUTES),
    )
    return code, challenge


def is_expired(challenge: Challenge, now: Optional[datetime] = None) -> bool:
    return (now or _utcnow()) >= challenge.expires_at


def verify_otp(code: str, challenge: Optional[Challenge], now: Optional[datetime] = None) -> bool:
    if challenge is None:
        return False
    # Expiry first: a correct but stale code must never match
    if is_expired(challenge, now):
        return False
    return verify_password(code, challenge.hashed_code)
