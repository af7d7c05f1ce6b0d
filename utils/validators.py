# utils/validators.py
"""
Request-body validation. Every validator is a pure function of the body and
returns ``(errors, values)``: a list of ``{"field", "message"}`` dicts (empty
when the body is valid) and the normalized values the service layer expects.
"""
import re
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models.task import TaskColor

EMAIL_RE = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.[A-Za-z]{2,}$")
OTP_RE = re.compile(r"^[0-9]{4}$")
TIME_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # bcrypt input ceiling
TASK_NAME_MAX = 200
TASK_COLORS = {c.value for c in TaskColor}

Errors = List[Dict[str, str]]


def _err(errors: Errors, field: str, message: str) -> None:
    errors.append({"field": field, "message": message})


def normalize_email(email: Any) -> str:
    return (email or "").strip().lower() if isinstance(email, str) else ""


def _check_email(body: Mapping, errors: Errors) -> str:
    email = normalize_email(body.get("email"))
    if not EMAIL_RE.match(email):
        _err(errors, "email", "Please provide a valid email")
    return email


def _check_password(body: Mapping, field: str, errors: Errors) -> str:
    password = body.get(field)
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        _err(errors, field, f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
        return password if isinstance(password, str) else ""
    if not re.search(r"\d", password):
        _err(errors, field, "Password must contain at least one number")
    if len(password.encode()) > PASSWORD_MAX_BYTES:
        _err(errors, field, f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return password


def _check_otp(body: Mapping, errors: Errors) -> str:
    otp = body.get("otp")
    otp = str(otp) if isinstance(otp, (str, int)) and not isinstance(otp, bool) else ""
    if len(otp) != 4:
        _err(errors, "otp", "OTP must be 4 digits")
    elif not OTP_RE.match(otp):
        _err(errors, "otp", "OTP must contain only numbers")
    return otp


def validate_signup(body: Mapping) -> Tuple[Errors, Dict[str, Any]]:
    errors: Errors = []
    email = _check_email(body, errors)
    password = _check_password(body, "password", errors)
    name = body.get("name")
    if name is not None:
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            _err(errors, "name", "Name cannot be empty")
    return errors, {"email": email, "password": password, "name": name}


def validate_login(body: Mapping) -> Tuple[Errors, Dict[str, Any]]:
    errors: Errors = []
    email = _check_email(body, errors)
    password = body.get("password")
    if not isinstance(password, str) or not password:
        _err(errors, "password", "Password is required")
        password = ""
    return errors, {"email": email, "password": password}


def validate_email_only(body: Mapping) -> Tuple[Errors, Dict[str, Any]]:
    errors: Errors = []
    email = _check_email(body, errors)
    return errors, {"email": email}


def validate_otp(body: Mapping) -> Tuple[Errors, Dict[str, Any]]:
    errors: Errors = []
    email = _check_email(body, errors)
    otp = _check_otp(body, errors)
    return errors, {"email": email, "otp": otp}


def validate_reset_password(body: Mapping) -> Tuple[Errors, Dict[str, Any]]:
    errors: Errors = []
    email = _check_email(body, errors)
    otp = _check_otp(body, errors)
    new_password = _check_password(body, "newPassword", errors)
    return errors, {"email": email, "otp": otp, "new_password": new_password}


# ───────────── TASKS ───────────────────────────────────────────────────────────
def _valid_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
        return True
    except ValueError:
        return False


def validate_task(body: Mapping, partial: bool = False) -> Tuple[Errors, Dict[str, Any]]:
    """
    Validate a task create (``partial=False``) or update (``partial=True``) body.
    Only fields present in the body end up in the returned values.
    """
    errors: Errors = []
    values: Dict[str, Any] = {}

    if "name" in body or not partial:
        name = body.get("name")
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            _err(errors, "name", "Task name is required")
        elif len(name) > TASK_NAME_MAX:
            _err(errors, "name", f"Task name must be between 1 and {TASK_NAME_MAX} characters")
        values["name"] = name

    if "time" in body or not partial:
        time_ = body.get("time")
        if not time_:
            _err(errors, "time", "Task time is required")
        elif not isinstance(time_, str) or not TIME_RE.match(time_):
            _err(errors, "time", "Time must be in HH:MM format")
        values["time"] = time_

    if "date" in body or not partial:
        date_ = body.get("date")
        if not date_:
            _err(errors, "date", "Task date is required")
        elif not _valid_date(date_):
            _err(errors, "date", "Date must be in valid format (YYYY-MM-DD)")
        values["date"] = date_

    if body.get("progress") is not None:
        progress = body["progress"]
        if isinstance(progress, bool) or not isinstance(progress, int) or not 0 <= progress <= 100:
            _err(errors, "progress", "Progress must be between 0 and 100")
        values["progress"] = progress

    if body.get("completed") is not None:
        if not isinstance(body["completed"], bool):
            _err(errors, "completed", "Completed must be a boolean")
        values["completed"] = body["completed"]

    if body.get("icon") is not None:
        icon = body["icon"]
        values["icon"] = icon.strip() if isinstance(icon, str) else str(icon)

    if body.get("color") is not None:
        if body["color"] not in TASK_COLORS:
            _err(errors, "color", "Color must be one of: " + ", ".join(c.value for c in TaskColor))
        values["color"] = body["color"]

    return errors, values


def parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return value.lower() == "true"
