from functools import wraps
from typing import Callable
import logging

from flask import request, Response

from utils.cors import cors_response, error_response
from auth.deps import current_user_from_request
from auth.errors import AuthError

logger = logging.getLogger(__name__)


def login_required(f: Callable) -> Callable:
    """
    Decorator that resolves the bearer token to an account and passes it to
    the handler as its first argument. Rejected requests get a 401 whose
    ``error`` tells an expired session apart from an invalid one.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs) -> Response:
        # Handle OPTIONS requests
        if request.method == "OPTIONS":
            return cors_response("", 204)

        try:
            user = current_user_from_request(request)
        except AuthError as e:
            return error_response(e)
        except Exception:
            logger.exception("Authentication failed")
            return error_response(None)

        return f(user, *args, **kwargs)

    return decorated_function
