from __future__ import annotations

import logging

import uvicorn

from user_registry.main import app
from user_registry.settings import get_settings

logger = logging.getLogger("user_registry")


def main() -> None:
    s = get_settings()
    logger.info("Server listening on http://%s:%s (id policy: %s)", s.host, s.port, s.id_policy.value)
    uvicorn.run(app, host=s.host, port=s.port, log_level=s.log_level.lower())


if __name__ == "__main__":
    main()
