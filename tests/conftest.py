"""Pytest configuration and shared fixtures."""

import os
import re
from concurrent.futures import Future

# Must be set before any application module reads its configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-signing-secret-for-the-suite-0123456789"

import pytest

from db import engine
from models import Base
from services import email_service
from factory import create_app


class ImmediateExecutor:
    """Runs background work inline so tests can observe it."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    """Capture outbound mail instead of talking to SMTP."""
    sent = []

    def fake_send(to, subject, body, html_body=None):
        sent.append({"to": to, "subject": subject, "body": body, "html": html_body})

    monkeypatch.setattr(email_service, "_send_email", fake_send)
    monkeypatch.setattr(email_service, "_executor", ImmediateExecutor())
    return sent


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


def last_code(outbox, to=None):
    """Pull the 4-digit code out of the most recent code email."""
    for mail in reversed(outbox):
        if to and mail["to"] != to:
            continue
        match = re.search(r": (\d{4})$", mail["body"], re.M)
        if match:
            return match.group(1)
    raise AssertionError("no code email sent")
