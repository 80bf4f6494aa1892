from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from user_registry.registry import IdPolicy


class Settings(BaseSettings):
    # Real environment variables win over a .env file in the working directory.
    model_config = SettingsConfigDict(
        env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8", populate_by_name=True
    )

    # Env vars:
    # - REGISTRY_HOST / REGISTRY_PORT: where the HTTP server listens
    # - REGISTRY_ID_POLICY: "monotonic" (default) or "size" (ids reused after deletes)
    # - LOG_LEVEL: root log level name
    host: str = Field(default="0.0.0.0", validation_alias="REGISTRY_HOST")
    port: int = Field(default=8080, ge=1, le=65535, validation_alias="REGISTRY_PORT")
    id_policy: IdPolicy = Field(default=IdPolicy.monotonic, validation_alias="REGISTRY_ID_POLICY")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def model_post_init(self, __context):  # type: ignore[override]
        self.log_level = (self.log_level or "INFO").upper().strip()


def get_settings() -> Settings:
    """Read a fresh Settings from the process environment.

    Not cached: create_app() and the server entry point call it at startup, and
    tests change env vars with monkeypatch between calls.
    """
    return Settings()
