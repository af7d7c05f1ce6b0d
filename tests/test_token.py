"""Session token issue and verification."""

import time
import uuid
from datetime import timedelta

import jwt
import pytest

from auth import token
from auth.errors import TokenInvalid, TokenExpired


def test_round_trip_returns_account_id():
    user_id = uuid.uuid4()
    assert token.decode_token(token.create_access_token(user_id)) == user_id


def test_default_lifetime_is_seven_days():
    payload = jwt.decode(
        token.create_access_token(uuid.uuid4()),
        token.SECRET_KEY,
        algorithms=[token.ALGORITHM],
    )
    lifetime = timedelta(seconds=payload["exp"] - time.time())
    assert timedelta(days=7) - timedelta(minutes=1) <= lifetime <= timedelta(days=7, seconds=1)


def test_expired_token():
    expired = token.create_access_token(uuid.uuid4(), expires_delta=timedelta(seconds=-5))
    with pytest.raises(TokenExpired):
        token.decode_token(expired)


def test_tampered_signature():
    good = token.create_access_token(uuid.uuid4())
    head, body, sig = good.split(".")
    forged = ".".join([head, body, sig[::-1]])
    with pytest.raises(TokenInvalid):
        token.decode_token(forged)


def test_tampered_payload():
    good = token.create_access_token(uuid.uuid4())
    other = token.create_access_token(uuid.uuid4())
    head, _, sig = good.split(".")
    forged = ".".join([head, other.split(".")[1], sig])
    with pytest.raises(TokenInvalid):
        token.decode_token(forged)


def test_other_secret_rejected():
    foreign = jwt.encode(
        {"sub": str(uuid.uuid4()), "exp": 4102444800, "type": "access"},
        "a-completely-different-signing-secret-000",
        algorithm="HS256",
    )
    with pytest.raises(TokenInvalid):
        token.decode_token(foreign)


@pytest.mark.parametrize("claims", [
    {"exp": 4102444800, "type": "access"},
    {"sub": "not-a-uuid", "exp": 4102444800, "type": "access"},
    {"sub": str(uuid.uuid4()), "exp": 4102444800, "type": "refresh"},
])
def test_malformed_payload(claims):
    bad = jwt.encode(claims, token.SECRET_KEY, algorithm=token.ALGORITHM)
    with pytest.raises(TokenInvalid):
        token.decode_token(bad)


def test_garbage_token():
    with pytest.raises(TokenInvalid):
        token.decode_token("definitely-not-a-token")
