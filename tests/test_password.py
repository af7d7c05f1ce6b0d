"""Password hashing and verification."""

import bcrypt
import pytest

from auth import utils
from auth.errors import HashingError


def test_hash_round_trip():
    hashed = utils.hash_password("pass123")
    assert hashed != "pass123"
    assert utils.verify_password("pass123", hashed)


def test_same_password_hashes_differently():
    first = utils.hash_password("pass123")
    second = utils.hash_password("pass123")
    assert first != second
    assert utils.verify_password("pass123", first)
    assert utils.verify_password("pass123", second)


def test_wrong_password_rejected():
    hashed = utils.hash_password("pass123")
    assert not utils.verify_password("pass124", hashed)


@pytest.mark.parametrize("stored", ["", "not-a-bcrypt-hash", "$2b$04$short"])
def test_verify_fails_closed_on_bad_hash(stored):
    assert utils.verify_password("pass123", stored) is False


def test_hash_failure_raises_hashing_error(monkeypatch):
    def broken_gensalt(*args, **kwargs):
        raise OSError("entropy source unavailable")

    monkeypatch.setattr(bcrypt, "gensalt", broken_gensalt)
    with pytest.raises(HashingError):
        utils.hash_password("pass123")
