"""Create a user (and optionally an organization it owns).

Usage:
  python scripts/create_user.py --email alice@acme.io --password '...' --full-name 'Alice' \
      [--organization 'Acme Inc']

NOTE: This is intended for local/dev. It goes through the same code path as
POST /api/auth/register, so validation of uniqueness and hashing is identical.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from realtalk_backend.auth import AuthError, AuthService
from realtalk_backend.config import load_config
from realtalk_backend.db import init_db


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", required=True)
    ap.add_argument("--full-name", required=True)
    ap.add_argument("--organization", default=None)
    args = ap.parse_args()

    if len(args.password) < 8:
        ap.error("--password must be at least 8 characters")

    cfg = load_config()
    init_db(cfg.DB_DSN)

    try:
        out = AuthService(cfg).register(
            email=args.email,
            password=args.password,
            full_name=args.full_name.strip(),
            organization_name=(args.organization or "").strip() or None,
        )
    except AuthError as e:
        print(f"Error: {e.detail}")
        sys.exit(1)

    print("Created user:")
    print(out["user"])
    if out["organization"]:
        print("Organization:")
        print(out["organization"])


if __name__ == "__main__":
    main()
