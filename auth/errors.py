"""Typed failures surfaced by the account lifecycle and the auth gate.

Each error carries a stable ``kind``, the HTTP ``status`` it maps to and a
human-readable ``message``. Routes render them with ``to_dict()``; anything
that is not an ``AuthError`` is treated as an internal failure.
"""
from typing import Optional, List, Dict, Any


class AuthError(Exception):
    kind = "AuthError"
    status = 400
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, data: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "error": self.kind, "message": self.message}
        if self.data is not None:
            body["data"] = self.data
        return body


class ValidationFailed(AuthError):
    kind = "ValidationFailed"
    status = 400
    default_message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class DuplicateAccount(AuthError):
    kind = "DuplicateAccount"
    status = 409
    default_message = "User with this email already exists"


class UnknownAccount(AuthError):
    kind = "UnknownAccount"
    status = 404
    default_message = "Account not found"


class InvalidCredentials(AuthError):
    kind = "InvalidCredentials"
    status = 401
    default_message = "Invalid email or password"


class NotVerified(AuthError):
    kind = "NotVerified"
    status = 403
    default_message = "Email not verified. Please verify your email."

    def __init__(self, email: str, message: Optional[str] = None):
        self.email = email
        super().__init__(message, data={"needsVerification": True, "email": email})


class AlreadyVerified(AuthError):
    kind = "AlreadyVerified"
    status = 400
    default_message = "User already verified"


class InvalidOrExpiredCode(AuthError):
    kind = "InvalidOrExpiredCode"
    status = 400
    default_message = "Invalid or expired OTP"


class EmailDeliveryFailed(AuthError):
    kind = "EmailDeliveryFailed"
    status = 500
    default_message = "Error sending email. Please try again later."


class TokenInvalid(AuthError):
    kind = "TokenInvalid"
    status = 401
    default_message = "Invalid token. Please login again."


class TokenExpired(AuthError):
    kind = "TokenExpired"
    status = 401
    default_message = "Token expired. Please login again."


class Unauthorized(AuthError):
    kind = "Unauthorized"
    status = 401
    default_message = "Not authorized to access this route. Please login."


class HashingError(AuthError):
    """Underlying hash primitive failed; fatal to the current operation."""
    kind = "HashingError"
    status = 500
    default_message = "Internal server error"
