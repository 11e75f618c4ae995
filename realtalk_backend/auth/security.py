from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict

import jwt
from passlib.context import CryptContext


_JWT_ALG = "HS256"
_REQUIRED_CLAIMS = ["sub", "exp", "iat"]


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime


@lru_cache(maxsize=8)
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(
        schemes=["pbkdf2_sha256"],
        deprecated="auto",
        pbkdf2_sha256__default_rounds=max(1000, int(rounds)),
    )


def hash_password(password: str, *, rounds: int = 29000) -> str:
    if not password:
        raise ValueError("password_blank")
    return _pwd_context(rounds).hash(password)


def verify_password(password: str, password_hash: str, *, rounds: int = 29000) -> bool:
    """Check a password against a stored hash.

    passlib compares digests in constant time. Malformed or unknown hashes count
    as a mismatch rather than an error.
    """
    if not password or not password_hash:
        return False
    try:
        return _pwd_context(rounds).verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def create_access_token(
    *,
    secret: str,
    user_id: int,
    email: str,
    role: str,
    expires_in: timedelta,
    now: datetime | None = None,
) -> str:
    if not secret:
        raise ValueError("jwt_secret_blank")

    issued = now or datetime.now(timezone.utc)
    exp = issued + expires_in

    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "iat": int(issued.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=_JWT_ALG)


def decode_access_token(*, token: str, secret: str) -> TokenClaims:
    """Verify signature + expiry and return the claims.

    Raises jwt.InvalidTokenError (or a subclass such as ExpiredSignatureError)
    for anything that is not a well-formed, unexpired token we signed.
    """
    if not token:
        raise jwt.InvalidTokenError("token_blank")
    if not secret:
        raise ValueError("jwt_secret_blank")

    # iat is only checked for presence; freshly issued tokens must not trip
    # over a clock that is a second behind.
    payload = jwt.decode(
        token,
        secret,
        algorithms=[_JWT_ALG],
        options={"require": _REQUIRED_CLAIMS, "verify_iat": False},
    )
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise jwt.InvalidTokenError("token_sub_not_int")

    return TokenClaims(
        user_id=user_id,
        email=str(payload.get("email") or ""),
        role=str(payload.get("role") or "user"),
        issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
    )
