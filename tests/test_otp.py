"""One-time code issuance and verification."""

from datetime import datetime, timedelta

from auth import otp

T0 = datetime(2026, 3, 1, 12, 0, 0)


def test_codes_are_four_digits_without_leading_zero():
    for _ in range(300):
        code = otp.generate_code()
        assert len(code) == 4
        assert code.isdigit()
        assert 1000 <= int(code) <= 9999


def test_issue_stores_only_a_hash():
    code, challenge = otp.issue_otp(T0)
    assert challenge.hashed_code != code
    assert code not in challenge.hashed_code
    assert challenge.expires_at == T0 + timedelta(minutes=10)


def test_verify_just_before_and_after_expiry():
    code, challenge = otp.issue_otp(T0)
    one_ms = timedelta(milliseconds=1)
    assert otp.verify_otp(code, challenge, now=challenge.expires_at - one_ms)
    assert not otp.verify_otp(code, challenge, now=challenge.expires_at + one_ms)
    assert not otp.verify_otp(code, challenge, now=challenge.expires_at)


def test_expired_code_is_never_hash_compared(monkeypatch):
    code, challenge = otp.issue_otp(T0)
    calls = []
    monkeypatch.setattr(otp, "verify_password", lambda *a: calls.append(a) or True)
    assert not otp.verify_otp(code, challenge, now=T0 + timedelta(minutes=11))
    assert calls == []


def test_wrong_code_rejected():
    code, challenge = otp.issue_otp(T0)
    wrong = "1000" if code != "1000" else "1001"
    assert not otp.verify_otp(wrong, challenge, now=T0)


def test_absent_challenge_rejected():
    assert not otp.verify_otp("1234", None, now=T0)
