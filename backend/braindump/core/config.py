from typing import Annotated, Any, Literal

from pydantic import (
    AnyUrl,
    BeforeValidator,
    HttpUrl,
    PostgresDsn,
    computed_field,
    model_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Use top level .env file (one level above ./backend/)
        env_file="../.env",
        env_ignore_empty=True,
        extra="ignore",
    )
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Braindump"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: HttpUrl | None = None

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Which storage the post API talks to: local Postgres or a hosted REST proxy.
    STORAGE_BACKEND: Literal["postgres", "rest"] = "postgres"

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "braindump"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> PostgresDsn:
        return MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 20
    DB_POOL_ACQUIRE_TIMEOUT: float = 5.0
    # psycopg_pool has no "never" value; one day is effectively no eviction
    DB_POOL_MAX_IDLE: float = 86400.0
    DB_POOL_MAX_LIFETIME: float = 86400.0
    DB_POOL_RECONNECT_TIMEOUT: float = 300.0
    DB_TCP_KEEPALIVE_IDLE: int = 10

    PROBE_TIMEOUT: float = 5.0
    PROBE_INTERVAL: float = 10.0
    PROBE_FAILURE_THRESHOLD: int = 3

    RECONNECT_MAX_ATTEMPTS: int = 10
    RECONNECT_BASE_DELAY: float = 1.0
    RECONNECT_MAX_DELAY: float = 60.0

    MEMORY_WARNING_MB: float = 500.0

    REST_STORAGE_URL: HttpUrl | None = None
    REST_STORAGE_API_KEY: str | None = None
    REST_STORAGE_TABLE: str = "Blog Posts"
    REST_STORAGE_TIMEOUT: float = 10.0

    @model_validator(mode="after")
    def _check_rest_storage(self) -> "Settings":
        if self.STORAGE_BACKEND == "rest" and not (
            self.REST_STORAGE_URL and self.REST_STORAGE_API_KEY
        ):
            raise ValueError(
                "STORAGE_BACKEND=rest requires REST_STORAGE_URL and REST_STORAGE_API_KEY"
            )
        return self


settings = Settings()  # type: ignore
