from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from ..core.constants import DEFAULT_TOKEN_TTL_MINUTES
from ..core.exceptions import AuthenticationError


class TokenService:
    """Issue and verify bearer tokens.

    Tokens only identify the subject. Roles are never read from a token.
    """

    def __init__(self, secret_key: str, *, algorithm: str = "HS256", ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = timedelta(minutes=int(ttl_minutes))

    def issue(self, user_id: int, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(int(user_id)),
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> int:
        """Return the user id carried by a valid token."""
        if not token:
            raise AuthenticationError("Missing bearer token")
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            raise AuthenticationError("Invalid or expired token")

        sub = payload.get("sub")
        try:
            return int(sub)
        except (TypeError, ValueError):
            raise AuthenticationError("Invalid token subject")
