"""
Pydantic schemas for the post API and the health payload.
"""

from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from braindump.models import PostBase

# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


class PostCreate(SQLModel):
    """Body for POST /api/posts. Emptiness is checked by the route (400, not 422)."""

    title: str | None = None
    content: str | None = None
    category: str | None = Field(default=None, max_length=64)


class PostPublic(PostBase):
    id: int | str
    created_at: datetime


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class OverallStatus(str, Enum):
    OK = "OK"
    DEGRADED = "DEGRADED"


class DatabaseCheck(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class MemoryCheck(str, Enum):
    HEALTHY = "healthy"
    WARNING = "warning"


class ConnectionStats(SQLModel):
    total: int = 0
    idle: int = 0
    waiting: int = 0


class HealthChecks(SQLModel):
    database: DatabaseCheck
    memory: MemoryCheck
    connections: ConnectionStats


class HealthStatus(SQLModel):
    """GET /health payload. Recomputed on every request, never stored."""

    status: OverallStatus
    timestamp: datetime
    uptime: float
    checks: HealthChecks
    memory_usage_mb: int | None = None
