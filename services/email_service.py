import os
import ssl
import smtplib
import logging
from concurrent.futures import ThreadPoolExecutor, Future
from email.message import EmailMessage
from datetime import datetime

from auth.errors import EmailDeliveryFailed
from auth.otp import OTP_TTL_MINUTES

SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER")
SMTP_PASS = os.getenv("SMTP_PASS")
EMAIL_FROM = os.getenv("EMAIL_FROM", SMTP_USER or "")
EMAIL_FROM_NAME = os.getenv("EMAIL_FROM_NAME", "To-Do List App")

logger = logging.getLogger(__name__)

# Background sends (welcome mail) never block a request
_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="mail")

# ────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────
def _send_email(to: str, subject: str, body: str, html_body: str = None) -> None:
    if not all([SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASS, EMAIL_FROM]):
        raise RuntimeError("SMTP configuration missing")

    msg = EmailMessage()
    msg["From"] = f'{EMAIL_FROM_NAME} <{EMAIL_FROM}>'
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(body)

    if html_body:
        msg.add_alternative(html_body, subtype="html")

    context = ssl.create_default_context()
    if SMTP_PORT == 465:
        with smtplib.SMTP_SSL(SMTP_HOST, SMTP_PORT, context=context) as server:
            server.login(SMTP_USER, SMTP_PASS)
            server.send_message(msg, from_addr=EMAIL_FROM, to_addrs=[to])
    else:
        with smtplib.SMTP(SMTP_HOST, SMTP_PORT) as server:
            server.starttls(context=context)
            server.login(SMTP_USER, SMTP_PASS)
            server.send_message(msg, from_addr=EMAIL_FROM, to_addrs=[to])


def _deliver(to: str, subject: str, body: str, html_body: str = None) -> None:
    try:
        _send_email(to=to, subject=subject, body=body, html_body=html_body)
    except Exception as e:
        logger.warning(f"Email delivery to {to} failed: {e}")
        raise EmailDeliveryFailed() from e


def _purpose_strings(purpose: str) -> tuple[str, str]:
    if purpose == "password_reset":
        return (
            "Password Reset OTP - To-Do List App",
            "Use this code to reset your password",
        )
    return (
        "Verify Your Email - To-Do List App",
        "Use this code to verify your email address",
    )


def _build_code_html(name: str, code: str, message_line: str) -> str:
    return f"""
<!DOCTYPE html>
<html>
<body style="margin: 0; padding: 0; background-color: #f5f5f5; font-family: 'Inter', Arial, sans-serif;">
    <table role="presentation" width="100%" cellspacing="0" cellpadding="0">
        <tr>
            <td align="center" style="padding: 40px 20px;">
                <table role="presentation" width="100%" cellspacing="0" cellpadding="0" style="max-width: 600px; background-color: #ffffff; border-radius: 16px;">
                    <tr>
                        <td align="center" style="padding: 30px; background: linear-gradient(135deg, #7041EE 0%, #9D7FEE 100%); color: #ffffff;">
                            <h1 style="margin: 0; font-size: 24px;">To-Do List App</h1>
                        </td>
                    </tr>
                    <tr>
                        <td style="padding: 40px 30px;">
                            <p style="color: #2D2D2D; line-height: 1.6;">Hi {name},</p>
                            <p style="color: #2D2D2D; line-height: 1.6;">{message_line}:</p>
                            <p style="text-align: center; font-size: 36px; font-weight: 700; color: #7041EE; letter-spacing: 8px; background-color: #E8E8F5; border-radius: 12px; padding: 20px;">
                                {code}
                            </p>
                            <p style="color: #808080; font-size: 14px; text-align: center;">
                                This code expires in {OTP_TTL_MINUTES} minutes.
                            </p>
                            <p style="color: #606060; font-size: 13px;">
                                If you didn't request this code, you can safely ignore this email.
                            </p>
                        </td>
                    </tr>
                    <tr>
                        <td style="padding: 20px; text-align: center; color: #505050; font-size: 12px;">
                            &copy; {datetime.utcnow().year} To-Do List App
                        </td>
                    </tr>
                </table>
            </td>
        </tr>
    </table>
</body>
</html>
"""


def send_code_email(email: str, code: str, name: str, purpose: str = "verification") -> None:
    """
    Email a one-time code for ``purpose`` ('verification' or 'password_reset').

    Raises ``EmailDeliveryFailed`` when SMTP is unconfigured or the transport
    errors. The code itself is never logged.
    """
    subject, line = _purpose_strings(purpose)
    plain_body = (
        f"Hi {name},\n\n"
        f"{line}: {code}\n"
        f"It expires in {OTP_TTL_MINUTES} minutes.\n\n"
        f"If you didn't request this, you can safely ignore this email.\n\n"
        f"— To-Do List App"
    )
    _deliver(email, subject, plain_body, _build_code_html(name, code, line))


def send_welcome_email(email: str, name: str) -> None:
    plain_body = (
        f"Hi {name},\n\n"
        f"Your email is verified and your account is ready.\n"
        f"Start organizing your day by adding your first task.\n\n"
        f"— To-Do List App"
    )
    _deliver(email, "Welcome to To-Do List App! 🎉", plain_body)


def _log_background_failure(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error(f"Background email failed: {exc.__class__.__name__}: {exc}")


def _dispatch(fn, *args, **kwargs) -> Future:
    future = _executor.submit(fn, *args, **kwargs)
    future.add_done_callback(_log_background_failure)
    return future


def dispatch_code_email(email: str, code: str, name: str, purpose: str = "verification") -> Future:
    """Send a code email off the request path; failures are only logged."""
    return _dispatch(send_code_email, email, code, name, purpose=purpose)


def dispatch_welcome_email(email: str, name: str) -> Future:
    """Queue the welcome mail and return immediately; failures are only logged."""
    return _dispatch(send_welcome_email, email, name)
