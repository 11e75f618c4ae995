"""HTTP probe for GET /health, used by container healthchecks."""

from __future__ import annotations

import requests


def check(host: str, port: int, timeout: float = 2.0) -> bool:
    """Return True iff the API answers /health with HTTP 200."""
    url = f"http://{host}:{port}/health"
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        print(f"[healthcheck] ERROR: {e}")
        return False
    print(f"[healthcheck] STATUS: {resp.status_code}")
    return resp.status_code == 200
