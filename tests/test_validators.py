"""Request-body validation."""

import pytest

from utils import validators


def _fields(errors):
    return {e["field"] for e in errors}


def test_signup_valid_and_normalized():
    errors, values = validators.validate_signup({"email": "  Alice@X.com ", "password": "pass123", "name": " Alice "})
    assert errors == []
    assert values == {"email": "alice@x.com", "password": "pass123", "name": "Alice"}


def test_signup_name_optional():
    errors, values = validators.validate_signup({"email": "a@x.com", "password": "pass123"})
    assert errors == []
    assert values["name"] is None


@pytest.mark.parametrize("password, message", [
    ("abc1", "Password must be at least 6 characters long"),
    ("abcdefg", "Password must contain at least one number"),
    ("a1" * 40, "Password must be at most 72 bytes"),
])
def test_signup_password_policy(password, message):
    errors, _ = validators.validate_signup({"email": "a@x.com", "password": password})
    assert {"field": "password", "message": message} in errors


def test_signup_reports_every_bad_field():
    errors, _ = validators.validate_signup({"email": "nope", "password": "x", "name": "   "})
    assert _fields(errors) == {"email", "password", "name"}


@pytest.mark.parametrize("otp", ["123", "12345", "12a4", "", None, True])
def test_otp_must_be_four_digits(otp):
    errors, _ = validators.validate_otp({"email": "a@x.com", "otp": otp})
    assert _fields(errors) == {"otp"}


def test_otp_accepts_numeric_json():
    errors, values = validators.validate_otp({"email": "a@x.com", "otp": 4821})
    assert errors == []
    assert values["otp"] == "4821"


def test_reset_password_uses_new_password_field():
    errors, values = validators.validate_reset_password({"email": "a@x.com", "otp": "1234", "newPassword": "newpass1"})
    assert errors == []
    assert values["new_password"] == "newpass1"

    errors, _ = validators.validate_reset_password({"email": "a@x.com", "otp": "1234", "newPassword": "short"})
    assert _fields(errors) == {"newPassword"}


def test_login_requires_password():
    errors, _ = validators.validate_login({"email": "a@x.com"})
    assert _fields(errors) == {"password"}


def test_task_create_requires_core_fields():
    errors, _ = validators.validate_task({})
    assert _fields(errors) == {"name", "time", "date"}


def test_task_create_valid():
    errors, values = validators.validate_task({
        "name": " Gym ", "time": "07:30", "date": "2026-03-01", "progress": 40, "color": "blue",
    })
    assert errors == []
    assert values == {"name": "Gym", "time": "07:30", "date": "2026-03-01", "progress": 40, "color": "blue"}


@pytest.mark.parametrize("body, field", [
    ({"time": "24:00"}, "time"),
    ({"date": "2026-02-30"}, "date"),
    ({"progress": 101}, "progress"),
    ({"progress": True}, "progress"),
    ({"completed": "yes"}, "completed"),
    ({"color": "red"}, "color"),
    ({"name": "x" * 201}, "name"),
])
def test_task_update_rejects_bad_fields(body, field):
    errors, _ = validators.validate_task(body, partial=True)
    assert _fields(errors) == {field}


def test_task_update_only_returns_present_fields():
    errors, values = validators.validate_task({"completed": True}, partial=True)
    assert errors == []
    assert values == {"completed": True}
