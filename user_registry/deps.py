from __future__ import annotations

from fastapi import Request

from user_registry.registry import UserRegistry


def get_registry(request: Request) -> UserRegistry:
    """FastAPI dependency for the registry.

    The instance lives on ``app.state`` (see user_registry.main.create_app), so
    every app built in tests gets its own, independent registry.
    """
    return request.app.state.registry
