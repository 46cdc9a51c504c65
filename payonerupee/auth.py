from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Header, Request
from jose import JWTError, jwt

from payonerupee.errors import TokenError

ALGORITHM = "HS256"
TOKEN_TTL = timedelta(days=7)


class TokenIssuer:
    """Signs and checks the short-lived "paid" claim handed to clients.

    Tokens are not tracked server-side; validity is purely a function of the
    signature and the ``exp`` claim.
    """

    def __init__(self, secret: str, ttl: timedelta = TOKEN_TTL):
        if not secret:
            raise ValueError("token signing secret is required")
        self._secret = secret
        self.ttl = ttl

    def issue(self, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        claims = {
            "paid": True,
            "ts": int(now.timestamp() * 1000),
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def validate(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError:
            raise TokenError()


def require_token(request: Request,
                  authorization: Optional[str] = Header(None)) -> dict:
    if not authorization or not authorization.startswith("Bearer "):
        raise TokenError()

    parts = authorization.split(" ")
    if len(parts) != 2 or not parts[1]:
        raise TokenError()

    return request.app.state.tokens.validate(parts[1])
