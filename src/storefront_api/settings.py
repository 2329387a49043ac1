"""
storefront_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Read the process environment (and an optional `.env` file) once.
- Normalize the `"true"`-string feature toggles used by deployments.
- Hide secrets from repr/logging (JWT secret, Pinecone key).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 8000


class Settings(BaseSettings):
    """
    Environment names carry no prefix (`MONGO_URI`, `PORT`, ...) so existing
    deployment manifests keep working.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = "storefront-api"
    log_level: str = "INFO"

    # Persistence. `mongo_uri` stays optional here; its absence is reported as a
    # fatal startup error by the orchestrator rather than a validation error.
    mongo_uri: str | None = Field(default=None, repr=False)
    mongo_db_name: str = "storefront"
    mongo_timeout_ms: int = 5000

    # Listener
    api_host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    # Startup toggles
    skip_seed_on_start: bool = False
    force_seed_on_start: bool = False
    enable_pinecone: bool = False

    # Vector search
    pinecone_api_key: str | None = Field(default=None, repr=False)
    pinecone_index: str = "products"
    pinecone_namespace: str = "products"
    pinecone_embed_model: str = "multilingual-e5-large"

    # HTTP
    cors_origins: str = "*"

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "storefront-api"
    jwt_audience: str = "storefront"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwt_ttl_minutes: int = 60 * 24

    @field_validator("skip_seed_on_start", "force_seed_on_start", "enable_pinecone", mode="before")
    @classmethod
    def _only_true_string(cls, value: Any) -> bool:
        # Toggles are on only for the literal "true"; "1", "yes", typos all mean off.
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() == "true"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Settings are read once per process; tests construct `Settings(...)` directly
# instead of going through the cache.
