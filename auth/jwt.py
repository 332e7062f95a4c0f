"""
JWT creation and verification.

Tokens are HS256-signed JWTs carrying ``sub`` (user id), ``email``, ``iat``
and ``exp``.  They live for eight hours and cannot be revoked; changing the
secret invalidates every outstanding token.  Issuer and audience are not
checked.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

ALGORITHM = "HS256"
TOKEN_TTL = timedelta(hours=8)


class InvalidTokenError(Exception):
    """Token is malformed or its signature does not match."""


class TokenExpiredError(InvalidTokenError):
    """Token signature is valid but ``exp`` has passed."""


def create_token(
    user_id: str,
    email: str,
    secret: str,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed token for ``user_id`` valid for ``TOKEN_TTL``."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + TOKEN_TTL).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(
    token: str,
    secret: str,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Verify ``token`` and return its claims.

    Expiry is evaluated against ``now`` (defaults to the current time).

    Raises ``TokenExpiredError`` past ``exp`` and ``InvalidTokenError`` for
    anything else wrong with the token.
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={
                "verify_exp": False,
                "verify_aud": False,
                "verify_iss": False,
            },
        )
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or "sub" not in claims:
        raise InvalidTokenError("missing required claims")

    current = now or datetime.now(timezone.utc)
    if current.timestamp() >= exp:
        raise TokenExpiredError("token expired")
    return claims
