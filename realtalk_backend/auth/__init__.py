"""Authentication helpers.

Auth is intentionally lightweight:

- Users table (email/password hash + role + status)
- Optional organization created at registration, with the user as owner
- Stateless JWT access tokens sent as `Authorization: Bearer <token>`

Tokens are never stored server-side, so logout is a client-side concern and a
token stays valid until it expires.
"""

from .deps import get_auth_service, get_token_claims
from .security import TokenClaims
from .service import AuthError, AuthService

__all__ = [
    "get_auth_service",
    "get_token_claims",
    "TokenClaims",
    "AuthError",
    "AuthService",
]
