"""Probe GET /health. Exit 0 on HTTP 200, 1 otherwise.

Meant for container HEALTHCHECK directives:
  HEALTHCHECK CMD python scripts/healthcheck.py
"""

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from realtalk_backend.healthcheck import check


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--host", default="localhost")
    ap.add_argument("--port", type=int, default=int(os.environ.get("API_PORT") or os.environ.get("PORT") or "3001"))
    ap.add_argument("--timeout", type=float, default=2.0)
    args = ap.parse_args()

    sys.exit(0 if check(args.host, args.port, args.timeout) else 1)


if __name__ == "__main__":
    main()
