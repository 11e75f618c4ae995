from __future__ import annotations

from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .security import TokenClaims, decode_access_token
from .service import AuthService


_bearer = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    auth = getattr(request.app.state, "auth", None)
    if auth is None:
        raise HTTPException(status_code=500, detail="server_config_missing")
    return auth


def get_token_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> TokenClaims:
    """Gate a route on a valid `Authorization: Bearer <jwt>` header.

    Routes opt in by depending on this. A missing token is a 401; a token that
    fails signature or expiry checks is a 403. The decoded claims are returned
    and also left on `request.state.claims` for downstream code.
    """

    token = credentials.credentials if credentials is not None else None
    if not token:
        raise HTTPException(
            status_code=401,
            detail="access_token_required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = decode_access_token(token=token, secret=auth.cfg.AUTH_JWT_SECRET)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=403, detail="invalid_token")

    request.state.claims = claims
    return claims
