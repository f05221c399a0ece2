"""
Post storage backends: local Postgres (psycopg pool) or hosted REST proxy (httpx).
"""

from braindump.core.config import Settings

from .base import ErrorHandler, PoolStats, PostStore


def build_store(config: Settings) -> PostStore:
    """Return the store selected by STORAGE_BACKEND (not yet opened)."""
    if config.STORAGE_BACKEND == "rest":
        from .rest import RestPostStore

        return RestPostStore.from_settings(config)

    from .postgres import PostgresPostStore

    return PostgresPostStore.from_settings(config)


__all__ = [
    "ErrorHandler",
    "PoolStats",
    "PostStore",
    "build_store",
]
