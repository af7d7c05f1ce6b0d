import os
import logging

import bcrypt

from auth.errors import HashingError

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Salted bcrypt hash; every call draws a fresh salt."""
    try:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()
    except Exception as e:
        logger.error(f"Password hashing failed: {e.__class__.__name__}")
        raise HashingError() from e


def verify_password(password: str, hash_: str) -> bool:
    # bcrypt.checkpw compares in constant time; anything unexpected fails closed
    if not password or not hash_:
        return False
    try:
        return bcrypt.checkpw(password.encode(), hash_.encode())
    except Exception as e:
        logger.warning(f"Password verification error: {e.__class__.__name__}")
        return False
