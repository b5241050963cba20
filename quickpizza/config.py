"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): settings are read once per process
    - The six retention limits never fail validation: a missing or non-numeric
      value falls back to the field default
    - database_url always names an async driver

Design Decisions:
    - pydantic-settings over raw os.environ: type coercion, .env file support
    - QUICKPIZZA_ prefix keeps the variable names of the deployed demo service
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Catalog settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QUICKPIZZA_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        "sqlite+aiosqlite:///:memory:",
        validation_alias=AliasChoices(
            "database_url", "QUICKPIZZA_DB", "DATABASE_URL",
        ),
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Plain driver URLs from the environment are mapped to their async drivers."""
        if isinstance(v, str):
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+asyncpg://", 1)
            if v.startswith("sqlite://"):
                return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    db_pool_size: int = 20
    db_max_overflow: int = 10

    # Retention: rows with id <= fixed survive; maximum <= 0 disables pruning
    db_fixed_pizzas: int = 100
    db_fixed_users: int = 10
    db_fixed_ratings: int = 10
    db_max_pizzas: int = 5000
    db_max_users: int = 5000
    db_max_ratings: int = 10000

    @field_validator(
        "db_fixed_pizzas", "db_fixed_users", "db_fixed_ratings",
        "db_max_pizzas", "db_max_users", "db_max_ratings",
        mode="before",
    )
    @classmethod
    def default_on_bad_int(cls, v: object, info: ValidationInfo) -> object:
        try:
            return int(v)
        except (TypeError, ValueError):
            return cls.model_fields[info.field_name].default

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
