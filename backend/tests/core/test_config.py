"""Unit tests for Settings validation and derived values."""

import pytest
from psycopg.conninfo import conninfo_to_dict
from pydantic import ValidationError

from braindump.core.config import Settings
from braindump.core.pool.connect import build_conninfo


def test_rest_backend_requires_url_and_key() -> None:
    with pytest.raises(ValidationError):
        Settings(STORAGE_BACKEND="rest", REST_STORAGE_API_KEY="anon-key")


def test_cors_origins_from_comma_separated_string() -> None:
    config = Settings(BACKEND_CORS_ORIGINS="http://localhost:5173, https://blog.example.com/")
    assert config.all_cors_origins == [
        "http://localhost:5173",
        "https://blog.example.com",
    ]


def test_database_uri_uses_psycopg_driver() -> None:
    config = Settings(POSTGRES_SERVER="db", POSTGRES_USER="blog", POSTGRES_PASSWORD="pw")
    assert str(config.SQLALCHEMY_DATABASE_URI).startswith("postgresql+psycopg://blog:pw@db:")


def test_conninfo_enables_tcp_keepalives() -> None:
    config = Settings(POSTGRES_SERVER="db", DB_TCP_KEEPALIVE_IDLE=15, DB_POOL_ACQUIRE_TIMEOUT=2.5)
    params = conninfo_to_dict(build_conninfo(config))
    assert params["host"] == "db"
    assert params["keepalives"] == "1"
    assert params["keepalives_idle"] == "15"
    assert params["connect_timeout"] == "3"
    assert params["application_name"] == "braindump"
