from __future__ import annotations

from typing import Any, Dict, Optional

from realtalk_backend.config import Config
from realtalk_backend.db import connect

from . import crud
from .security import TokenClaims, create_access_token, hash_password, verify_password


def _debug(msg: str) -> None:
    print(f"[auth] {msg}")


class AuthError(Exception):
    """A failure that maps directly onto an HTTP error response."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class UserExistsError(AuthError):
    status_code = 400


class InvalidCredentialsError(AuthError):
    status_code = 401


class UserNotFoundError(AuthError):
    status_code = 404


class AuthService:
    """Registration, login and current-user lookup.

    All settings (DB, signing secret, token lifetime, hash cost) come from the
    Config handed in at construction.
    """

    def __init__(self, cfg: Config):
        if not cfg.AUTH_JWT_SECRET:
            raise ValueError("jwt_secret_blank")
        self.cfg = cfg
        # Parsed once so a bad AUTH_TOKEN_EXPIRES_IN fails at startup.
        self.token_ttl = cfg.token_ttl
        self._dummy_hash = self.hash_password("realtalk-dummy-password")

    # -----------------------------
    # Tokens
    # -----------------------------

    def issue_token(self, user: Dict[str, Any]) -> str:
        return create_access_token(
            secret=self.cfg.AUTH_JWT_SECRET,
            user_id=int(user["user_id"]),
            email=str(user["email"]),
            role=str(user["role"]),
            expires_in=self.token_ttl,
        )

    # -----------------------------
    # Passwords
    # -----------------------------

    def hash_password(self, password: str) -> str:
        return hash_password(password, rounds=self.cfg.AUTH_PASSWORD_ROUNDS)

    def check_password(self, password: str, password_hash: Optional[str]) -> bool:
        if password_hash is None:
            # Same work as a real check so response time does not reveal
            # whether the email exists.
            verify_password(password, self._dummy_hash)
            return False
        return verify_password(password, password_hash)

    # -----------------------------
    # Flows
    # -----------------------------

    def register(
        self,
        *,
        email: str,
        password: str,
        full_name: str,
        organization_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a user (and optionally an owned organization) in one transaction."""
        email = crud.normalize_email(email)
        organization: Optional[Dict[str, Any]] = None
        with connect(self.cfg.DB_DSN) as conn:
            if crud.get_user_by_email(conn, email) is not None:
                raise UserExistsError("user_already_exists")

            password_hash = self.hash_password(password)

            user = crud.insert_user(
                conn,
                email=email,
                password_hash=password_hash,
                full_name=full_name,
            )
            if organization_name:
                organization = crud.insert_organization(
                    conn,
                    name=organization_name,
                    owner_id=int(user["user_id"]),
                )
                crud.add_member(
                    conn,
                    user_id=int(user["user_id"]),
                    organization_id=int(organization["organization_id"]),
                    role="owner",
                )
                organization["role"] = "owner"

            # Signed before commit: a signing failure rolls the inserts back.
            token = self.issue_token(user)

        _debug(f"registered user_id={user['user_id']} with_org={organization is not None}")
        return {
            "token": token,
            "user": crud.public_user(user),
            "organization": organization,
        }

    def login(self, *, email: str, password: str) -> Dict[str, Any]:
        email = crud.normalize_email(email)
        with connect(self.cfg.DB_DSN) as conn:
            row = crud.get_user_by_email(conn, email)
            stored_hash = str(row["password_hash"]) if row is not None else None
            if not self.check_password(password, stored_hash):
                _debug(f"failed login for email={email}")
                raise InvalidCredentialsError("invalid_credentials")

            user = dict(row)
            if user.get("status") != "active":
                raise InvalidCredentialsError("account_inactive")

            user["last_login_at"] = crud.touch_last_login(conn, int(user["user_id"]))
            organizations = crud.list_memberships(conn, int(user["user_id"]))
            token = self.issue_token(user)

        _debug(f"login user_id={user['user_id']}")
        return {
            "token": token,
            "user": crud.public_user(user),
            "organizations": organizations,
        }

    def current_user(self, claims: TokenClaims) -> Dict[str, Any]:
        """Fresh profile for the user behind a verified token."""
        with connect(self.cfg.DB_DSN) as conn:
            row = crud.get_user_by_id(conn, claims.user_id)
            if row is None:
                raise UserNotFoundError("user_not_found")
            organizations = crud.list_memberships(conn, claims.user_id)
        return {"user": crud.public_user(row), "organizations": organizations}
