import os
import uuid
from datetime import datetime, timedelta
from typing import Optional, Union

import jwt
from jwt.exceptions import PyJWTError as JWTError, ExpiredSignatureError
import logging

from auth.errors import TokenInvalid, TokenExpired

SECRET_KEY = os.getenv("JWT_SECRET_KEY", "default-secret-change-in-production-0000")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "7"))

logger = logging.getLogger(__name__)


def create_access_token(user_id: Union[str, uuid.UUID], expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.utcnow() + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {"sub": str(user_id), "exp": expire, "type": "access"}
    token = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    logger.debug(f"Access token created for {user_id} expiring at {expire}")
    return token


def decode_token(token: str) -> uuid.UUID:
    """
    Verify a session token and return the account id it carries.

    Raises ``TokenExpired`` once the embedded expiry has passed and
    ``TokenInvalid`` for a bad signature or a malformed payload.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM], options={"require": ["exp", "sub"]})
    except ExpiredSignatureError as e:
        logger.warning("Rejected expired token")
        raise TokenExpired() from e
    except JWTError as e:
        logger.warning(f"Failed to decode JWT: {e}")
        raise TokenInvalid() from e

    if payload.get("type") != "access":
        logger.warning("Token is not an access token")
        raise TokenInvalid()
    try:
        return uuid.UUID(payload["sub"])
    except (ValueError, TypeError) as e:
        raise TokenInvalid() from e
