from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from user_registry.deps import get_registry
from user_registry.errors import MalformedInputError
from user_registry.logging_config import configure_logging
from user_registry.models import HealthResponse
from user_registry.registry import UserRegistry
from user_registry.routers.users import router as users_router
from user_registry.settings import Settings, get_settings

logger = logging.getLogger("user_registry")

APP_VERSION = "1.0.0"


def _malformed_input(exc: RequestValidationError) -> MalformedInputError:
    locs = [tuple(err.get("loc") or ()) for err in exc.errors()]
    if any(loc[:1] == ("path",) for loc in locs):
        return MalformedInputError("Invalid user ID")
    return MalformedInputError("Malformed request body")


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # FastAPI reports decoding failures as 422; this service reports them as 400.
    err = _malformed_input(exc)
    logger.warning("Malformed input on %s %s: %s", request.method, request.url.path, err)
    return JSONResponse(status_code=400, content={"detail": str(err)})


def create_app(settings: Optional[Settings] = None, registry: Optional[UserRegistry] = None) -> FastAPI:
    """Build the HTTP application around a single registry instance.

    Pass ``registry`` to share one across apps (or to inspect it from a test);
    otherwise a fresh one is created using ``settings.id_policy``.
    """
    s = settings or get_settings()
    app = FastAPI(title="User Registry", version=APP_VERSION)
    app.state.registry = registry if registry is not None else UserRegistry(id_policy=s.id_policy)

    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.include_router(users_router)

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Hello Client!"

    @app.get("/healthz", response_model=HealthResponse)
    def healthz(reg: UserRegistry = Depends(get_registry)) -> HealthResponse:
        return HealthResponse(
            ok=True,
            service="user-registry",
            version=APP_VERSION,
            id_policy=reg.id_policy.value,
            users=reg.count(),
        )

    return app


configure_logging(get_settings().log_level)

app = create_app()
