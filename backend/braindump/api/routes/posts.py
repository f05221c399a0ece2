"""
Posts: list (paged, filtered, ordered) and create.

Every storage call goes through the request guard, so an unreachable store
answers 503 and an unexpected query failure 500.
"""

from typing import Any

from fastapi import APIRouter, Query

from braindump.api.deps import RuntimeDep
from braindump.core.errors import ValidationError
from braindump.models import DEFAULT_CATEGORY
from braindump.schemas import PostCreate, PostPublic

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostPublic])
async def list_posts(
    runtime: RuntimeDep,
    page: int = Query(default=0, ge=0),
    limit: int = Query(default=10, ge=1, le=100),
    category: str | None = None,
    ascending: bool = False,
) -> Any:
    """Posts newest first (oldest first when ``ascending``), ``limit`` per page."""
    store = runtime.store
    return await runtime.guard.run(
        lambda: store.list_posts(
            page=page, limit=limit, category=category or None, ascending=ascending
        ),
        name="list_posts",
    )


@router.post("", status_code=201, response_model=PostPublic)
async def create_post(body: PostCreate, runtime: RuntimeDep) -> Any:
    """Create a post; ``created_at`` is set by storage, category defaults to "thought"."""
    title = (body.title or "").strip()
    content = (body.content or "").strip()
    if not title or not content:
        raise ValidationError("Title and content are required")
    category = (body.category or "").strip() or DEFAULT_CATEGORY

    store = runtime.store
    return await runtime.guard.run(
        lambda: store.create_post(title=title, content=content, category=category),
        name="create_post",
    )
