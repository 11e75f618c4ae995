import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import uvicorn

from realtalk_backend.config import load_config


def main() -> None:
    cfg = load_config()
    print(f"Dashboard: http://localhost:{cfg.API_PORT}")
    print(f"Health:    http://localhost:{cfg.API_PORT}/health")
    print(f"Stats API: http://localhost:{cfg.API_PORT}/api/dashboard/stats")
    uvicorn.run(
        "realtalk_backend.api.server:create_app",
        factory=True,
        host=cfg.API_HOST,
        port=cfg.API_PORT,
        reload=False,
    )


if __name__ == "__main__":
    main()
