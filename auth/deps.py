from flask import Request

from models import User
from auth.token import decode_token
from auth.errors import Unauthorized, UnknownAccount
from services.account_service import get_account


def get_current_user(token: str) -> User:
    user_id = decode_token(token)
    try:
        return get_account(user_id)
    except UnknownAccount as e:
        # Tokens outlive deleted accounts; the lookup is what rejects them
        raise Unauthorized("User not found. Please login again.") from e


def current_user_from_request(req: Request) -> User:
    """
    Resolve the acting account from ``Authorization: Bearer <token>``.

    Raises ``Unauthorized`` when the header is missing or the account is gone,
    ``TokenInvalid`` / ``TokenExpired`` when the token itself is rejected.
    """
    auth = req.headers.get("Authorization", "")
    if not auth.startswith("Bearer ") or not auth[7:].strip():
        raise Unauthorized()
    return get_current_user(auth[7:].strip())
