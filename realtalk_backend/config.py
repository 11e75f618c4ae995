import os
import re
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

# Optional: load a local .env file if present.
try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    # If python-dotenv isn't installed or .env isn't present, that's fine.
    pass


_PACKAGE_DIR = Path(__file__).resolve().parent

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {
    "": 1,
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
}


def parse_duration(value: str | int) -> timedelta:
    """Parse a token lifetime such as "7d", "12h", "30m", "45s" or "3600".

    A bare integer is a number of seconds. Raises ValueError for anything else.
    """
    if isinstance(value, int):
        seconds = value
    else:
        m = _DURATION_RE.match(str(value or ""))
        if m is None:
            raise ValueError(f"invalid_duration: {value!r}")
        seconds = int(m.group(1)) * _DURATION_UNITS[m.group(2).lower()]
    if seconds <= 0:
        raise ValueError(f"invalid_duration: {value!r}")
    return timedelta(seconds=seconds)


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    IMPORTANT: Provide secrets via environment variables or a .env file.
    Do not hardcode secrets in source code.
    """

    # -----------------
    # Core
    # -----------------
    # Preferred: set REALTALK_DATABASE_URL (or DATABASE_URL) to use Postgres.
    # Fallback: REALTALK_DB_PATH for SQLite.
    DB_DSN: str = (
        os.environ.get("REALTALK_DATABASE_URL")
        or os.environ.get("DATABASE_URL")
        or os.environ.get("REALTALK_DB_PATH", "./realtalk.sqlite")
    )

    # "development" exposes exception messages in 500 responses.
    APP_ENV: str = os.environ.get("APP_ENV") or os.environ.get("NODE_ENV") or "production"

    # -----------------
    # HTTP
    # -----------------
    API_HOST: str = os.environ.get("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.environ.get("API_PORT") or os.environ.get("PORT") or "3001")

    # Comma-separated; "*" allows any origin.
    CORS_ALLOW_ORIGINS: str = os.environ.get("CORS_ALLOW_ORIGINS", "*")

    # Directory holding index.html and the dashboard assets.
    STATIC_DIR: str = os.environ.get("STATIC_DIR", str(_PACKAGE_DIR / "public"))

    # -----------------
    # Auth (JWT)
    # -----------------
    # NOTE: In dev, this defaults to a fixed string so you can get started.
    # In production, you MUST set AUTH_JWT_SECRET to a strong random value.
    AUTH_JWT_SECRET: str = (
        os.environ.get("AUTH_JWT_SECRET")
        or os.environ.get("JWT_SECRET")
        or "dev_change_me"
    )
    AUTH_TOKEN_EXPIRES_IN: str = (
        os.environ.get("AUTH_TOKEN_EXPIRES_IN")
        or os.environ.get("JWT_EXPIRES_IN")
        or "7d"
    )

    # pbkdf2-sha256 iterations. Lower only in tests.
    AUTH_PASSWORD_ROUNDS: int = int(os.environ.get("AUTH_PASSWORD_ROUNDS", "29000"))

    # -----------------
    # Billing (Stripe)
    # -----------------
    STRIPE_SECRET_KEY: str | None = os.environ.get("STRIPE_SECRET_KEY")
    BILLING_SUCCESS_URL: str = os.environ.get(
        "BILLING_SUCCESS_URL",
        "http://localhost:3000/dashboard?success=true",
    )
    BILLING_CANCEL_URL: str = os.environ.get(
        "BILLING_CANCEL_URL",
        "http://localhost:3000/dashboard?canceled=true",
    )

    @property
    def token_ttl(self) -> timedelta:
        return parse_duration(self.AUTH_TOKEN_EXPIRES_IN)

    @property
    def is_development(self) -> bool:
        return (self.APP_ENV or "").strip().lower() in ("development", "dev")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in (self.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]


def load_config() -> Config:
    return Config()
