"""Application configuration using Pydantic Settings with YAML support.

Configuration is organised in nested sections, one per concern:
- ``app`` / ``server`` / ``api``: service identity and HTTP surface
- ``logging``: loguru output format and level
- ``reviews``: Judge.me upstream, pagination bounds and the review cache TTL
- ``catalog``: Shopify Admin GraphQL upstream, chunking and metafield names

Secrets (API tokens) are only read from the environment or ``.env``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Storefront Gateway"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 3000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1/storefront"
    cors_origins: list[str] = [
        "https://tilemart.com",
        "http://127.0.0.1:9292",
        "http://localhost:9292",
    ]


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class ReviewsSettings(BaseModel):
    """Judge.me reviews upstream and cache configuration."""

    base_url: str = "https://judge.me/api/v1"
    shop_domain: str = "mytilemart.myshopify.com"
    page_size: int = Field(default=100, gt=0)
    max_pages: int = Field(default=200, gt=0)  # hard ceiling per refresh run
    timeout: float = 5.0  # per page request, single attempt
    cache_ttl: int = 86400  # 24 hours
    min_rating: int = Field(default=4, ge=0, le=5)


class CatalogSettings(BaseModel):
    """Shopify catalog upstream configuration."""

    shop_domain: str = "mytilemart.myshopify.com"
    api_version: str = "2024-10"
    timeout: float = 5.0
    chunk_size: int = Field(default=50, gt=0, le=250)  # query complexity limit
    max_handles: int = Field(default=500, gt=0)
    metafield_namespace: str = "custom"
    parent_product_metafield: str = "custom.parent_product"

    @model_validator(mode="after")
    def _parent_metafield_in_namespace(self) -> Self:
        """Only metafields in ``metafield_namespace`` are fetched from Shopify."""
        namespace, _, key = self.parent_product_metafield.rpartition(".")
        if namespace != self.metafield_namespace or not key:
            msg = (
                f"parent_product_metafield {self.parent_product_metafield!r} must be "
                f"'{self.metafield_namespace}.<key>'"
            )
            raise ValueError(msg)
        return self


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Priority (highest to lowest): init arguments, environment variables,
    ``.env`` file, environment YAML, base YAML, defaults in code.
    Nested values can be overridden with ``__``, e.g. ``REVIEWS__CACHE_TTL=60``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    reviews: ReviewsSettings = ReviewsSettings()
    catalog: CatalogSettings = CatalogSettings()

    # Secrets (from .env only - never in YAML)
    JUDGEME_API_TOKEN: str = ""
    SHOPIFY_ACCESS_TOKEN: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source below environment and ``.env`` values."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def shopify_graphql_url(self) -> str:
        """Full Admin GraphQL endpoint URL for the configured shop."""
        return (
            f"https://{self.catalog.shop_domain}/admin/api/"
            f"{self.catalog.api_version}/graphql.json"
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
