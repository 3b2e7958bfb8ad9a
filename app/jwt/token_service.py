"""
Session token service

Issues and verifies the signed, time-limited token kept in the session cookie.
Payload: {"uid": <user id>, "username": <user name>, "iat": ..., "exp": ...}

No refresh, rotation or revocation: a token stays valid until its exp claim
passes, sign-out only clears the cookie on the client.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.utils.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdentityClaim(BaseModel):
    """
    Decoded session token payload
    - uid: user id
    - username: user name at issuance time
    """
    uid: int
    username: str


class TokenService:
    """
    JWT issue/verify with a process-wide secret
    - the secret comes from configuration, passed in by the caller
    - clock is injectable so expiry can be tested without sleeping
    """
    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 60 * 60 * 24,
        clock: Clock = _utcnow,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, claim: IdentityClaim, ttl_seconds: Optional[int] = None) -> str:
        """
        Sign {uid, username} with iat/exp claims
        """
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        now = self._clock()
        payload = {
            "uid": claim.uid,
            "username": claim.username,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=ttl)).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> IdentityClaim:
        """
        Return the identity claim of a valid token
        Raises:
            InvalidTokenError: bad signature, malformed token or claims, expired
        """
        try:
            # exp is checked below against the injected clock
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            logger.warning("Rejected session token: %s", exc)
            raise InvalidTokenError("Not Authorized")

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidTokenError("Not Authorized")
        if self._clock().timestamp() >= exp:
            logger.info("Expired session token for uid=%s", payload.get("uid"))
            raise InvalidTokenError("Not Authorized")

        try:
            return IdentityClaim(uid=payload["uid"], username=payload["username"])
        except (KeyError, PydanticValidationError):
            raise InvalidTokenError("Not Authorized")
