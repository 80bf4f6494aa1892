from __future__ import annotations

import sys
from pathlib import Path

# Allow running as: python scripts/registry_smoketest.py
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from fastapi.testclient import TestClient

from user_registry.main import create_app


def main() -> int:
    c = TestClient(create_app())

    r = c.get("/")
    print("/", r.status_code, r.text)

    r = c.post("/user", json={"name": "Alice"})
    print("POST /user", r.status_code, r.headers.get("location"))
    if r.status_code != 202:
        print(r.text)
        return 1
    location = r.headers["location"]

    r = c.get(location)
    print("GET", location, r.status_code, r.json())

    r = c.delete(location)
    print("DELETE", location, r.status_code)

    r = c.get(location)
    print("GET(after delete)", location, r.status_code, r.json())

    r = c.get("/healthz")
    print("/healthz", r.status_code, r.json())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
