"""
TokenService unit tests

Issue/verify round trip, expiry through an injected clock, and rejection
of tampered, foreign-key-signed and malformed tokens.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.jwt.token_service import IdentityClaim, TokenService
from app.utils.exceptions import InvalidTokenError, UnauthorizedError

SECRET = "unit-test-secret"


class FakeClock:
    """Settable clock standing in for datetime.now"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class TestTokenService:

    def setup_method(self):
        self.clock = FakeClock(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))
        self.service = TokenService(SECRET, ttl_seconds=3600, clock=self.clock)
        self.claim = IdentityClaim(uid=7, username="ada")

    def test_verify_returns_issued_claim(self):
        token = self.service.issue(self.claim)
        assert self.service.verify(token) == self.claim

    def test_payload_carries_uid_username_and_expiry(self):
        token = self.service.issue(self.claim)
        payload = jwt.get_unverified_claims(token)
        assert payload["uid"] == 7
        assert payload["username"] == "ada"
        assert payload["exp"] - payload["iat"] == 3600

    def test_token_valid_just_before_expiry(self):
        token = self.service.issue(self.claim)
        self.clock.advance(seconds=3599)
        assert self.service.verify(token).uid == 7

    def test_token_rejected_at_expiry(self):
        token = self.service.issue(self.claim)
        self.clock.advance(seconds=3600)
        with pytest.raises(InvalidTokenError):
            self.service.verify(token)

    def test_token_rejected_a_day_later(self):
        token = self.service.issue(self.claim)
        self.clock.advance(days=1)
        with pytest.raises(InvalidTokenError):
            self.service.verify(token)

    def test_per_call_ttl_override(self):
        token = self.service.issue(self.claim, ttl_seconds=10)
        self.clock.advance(seconds=11)
        with pytest.raises(InvalidTokenError):
            self.service.verify(token)

    def test_other_secret_rejected(self):
        other = TokenService("another-secret", clock=self.clock)
        token = other.issue(self.claim)
        with pytest.raises(InvalidTokenError):
            self.service.verify(token)

    def test_tampered_payload_rejected(self):
        token = self.service.issue(self.claim)
        header, payload, signature = token.split(".")
        forged = jwt.encode({"uid": 1, "username": "root", "exp": 4102444800}, "guess")
        forged_payload = forged.split(".")[1]
        with pytest.raises(InvalidTokenError):
            self.service.verify(f"{header}.{forged_payload}.{signature}")

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "a.b"])
    def test_malformed_token_rejected(self, token):
        with pytest.raises(InvalidTokenError):
            self.service.verify(token)

    def test_missing_claims_rejected(self):
        exp = int((self.clock() + timedelta(hours=1)).timestamp())
        token = jwt.encode({"uid": 7, "exp": exp}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            self.service.verify(token)

    def test_missing_exp_rejected(self):
        token = jwt.encode({"uid": 7, "username": "ada"}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            self.service.verify(token)

    def test_invalid_token_is_unauthorized(self):
        assert issubclass(InvalidTokenError, UnauthorizedError)

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            TokenService("")
