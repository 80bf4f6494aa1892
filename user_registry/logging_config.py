from __future__ import annotations

import logging


def configure_logging(level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger at ``level``.

    Runs once at import of user_registry.main and from the stress CLI. Unknown
    level names fall back to INFO. uvicorn's own loggers are left alone.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
