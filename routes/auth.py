from flask import Blueprint, request
import logging

from utils.cors import cors_response, success_response, error_response
from utils.validators import (
    validate_signup,
    validate_login,
    validate_email_only,
    validate_otp,
    validate_reset_password,
)
from auth.decorators import login_required
from auth.errors import AuthError, ValidationFailed
from services import account_service

logger = logging.getLogger(__name__)
bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _validated(validator) -> dict:
    body = request.get_json(silent=True)
    errors, values = validator(body if isinstance(body, dict) else {})
    if errors:
        raise ValidationFailed(errors)
    return values


@bp.route("/signup", methods=["POST", "OPTIONS"])
def signup():
    """
    Register a new, unverified account and email it a verification code.

    Returns:
        201 with ``{email, isVerified: false}``

    Raises:
        400: ValidationFailed
        409: DuplicateAccount
        500: EmailDeliveryFailed (the account is rolled back)
    """
    if request.method == "OPTIONS":
        return cors_response("", 204)

    try:
        values = _validated(validate_signup)
        data = account_service.signup(values["email"], values["password"], values["name"])
        return success_response(
            "User registered. Please check your email for the verification code.", data, 201
        )
    except AuthError as e:
        return error_response(e)
    except Exception:
        logger.exception("Signup failed")
        return error_response(None)


@bp.route("/verify-email", methods=["POST", "OPTIONS"])
def verify_email():
    """
    Confirm the signup code; on success the account is verified and logged in.

    Returns:
        200 with ``{token, user: {id, email, name}}``

    Raises:
        400: ValidationFailed, AlreadyVerified, InvalidOrExpiredCode
        404: UnknownAccount
    """
    if request.method == "OPTIONS":
        return cors_response("", 204)

    try:
        values = _validated(validate_otp)
        data = account_service.verify_email(values["email"], values["otp"])
        return success_response("Email verified successfully", data)
    except AuthError as e:
        return error_response(e)
    except Exception:
        logger.exception("Email verification failed")
        return error_response(None)


@bp.route("/resend-verification", methods=["POST", "OPTIONS"])
def resend_verification():
    if request.method == "OPTIONS":
        return cors_response("", 204)

    try:
        values = _validated(validate_email_only)
        data = account_service.resend_verification(values["email"])
        return success_response(data.pop("message"), data)
    except AuthError as e:
        return error_response(e)
    except Exception:
        logger.exception("Resending verification code failed")
        return error_response(None)


@bp.route("/login", methods=["POST", "OPTIONS"])
def login():
    """
    Authenticate with email and password.

    Returns:
        200 with ``{token, user: {id, email, name}}``

    Raises:
        400: ValidationFailed
        401: InvalidCredentials (same for unknown email and wrong password)
        403: NotVerified, with ``{needsVerification, email}``
    """
    if request.method == "OPTIONS":
        return cors_response("", 204)

    try:
        values = _validated(validate_login)
        data = account_service.login(values["email"], values["password"])
        return success_response("Login successful", data)
    except AuthError as e:
        return error_response(e)
    except Exception:
        logger.exception("Login failed")
        return error_response(None)


@bp.route("/forgot-password", methods=["POST", "OPTIONS"])
def forgot_password():
    """
    Start a password reset. Always answers with the same generic success to
    prevent account enumeration.
    """
    if request.method == "OPTIONS":
        return cors_response("", 204)

    try:
        values = _validated(validate_email_only)
        data = account_service.forgot_password(values["email"])
        return success_response(data.pop("message"), data)
    except AuthError as e:
        return error_response(e)
    except Exception:
        logger.exception("Forgot password failed")
        return error_response(None)


@bp.route("/verify-otp", methods=["POST", "OPTIONS"])
def verify_otp():
    """Check a password-reset code without consuming it."""
    if request.method == "OPTIONS":
        return cors_response("", 204)

    try:
        values = _validated(validate_otp)
        account_service.check_reset_code(values["email"], values["otp"])
        return success_response("OTP verified successfully", {})
    except AuthError as e:
        return error_response(e)
    except Exception:
        logger.exception("Verify OTP failed")
        return error_response(None)


@bp.route("/reset-password", methods=["POST", "OPTIONS"])
def reset_password():
    """
    Set a new password using the emailed reset code. The old password is not
    required.

    Raises:
        400: ValidationFailed, InvalidOrExpiredCode
    """
    if request.method == "OPTIONS":
        return cors_response("", 204)

    try:
        values = _validated(validate_reset_password)
        account_service.reset_password(values["email"], values["otp"], values["new_password"])
        return success_response(
            "Password reset successful. You can now login with your new password.", {}
        )
    except AuthError as e:
        return error_response(e)
    except Exception:
        logger.exception("Reset password failed")
        return error_response(None)


@bp.route("/me", methods=["GET", "OPTIONS"])
@login_required
def me(user):
    data = user.public_dict()
    data["isVerified"] = user.is_verified
    data["createdAt"] = user.created_at.isoformat() if user.created_at else None
    return success_response("OK", data)


@bp.route("/delete", methods=["DELETE", "OPTIONS"])
@login_required
def delete_account(user):
    """
    Permanently delete the authenticated account and every task it owns.

    Raises:
        401: Unauthorized, TokenInvalid, TokenExpired
        404: UnknownAccount
    """
    try:
        account_service.delete_account(user.id)
        return success_response("Account deleted successfully", {})
    except AuthError as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to delete account")
        return error_response(None)
