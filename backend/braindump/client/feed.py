"""
Read and write views over the blog API.

PostFeed keeps already-loaded posts when a later page fails and only shows
the failure message when nothing is on screen. Fetches are not sequenced: a
response for an older page or filter can still append after a newer one.

PostComposer keeps the entered form data when a submit fails.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx

from braindump.core.errors import BraindumpError

from .api import BlogApiClient

_log = logging.getLogger(__name__)

PAGE_SIZE = 10
LOAD_FAILED_MESSAGE = (
    "Failed to load posts. Please check your connection and try again."
)

Alert = Callable[[str], None]


def _log_alert(message: str) -> None:
    _log.warning("%s", message)


class PostFeed:
    def __init__(self, api: BlogApiClient, *, page_size: int = PAGE_SIZE) -> None:
        self.api = api
        self.page_size = page_size
        self.page = 0
        self.category = ""  # "" means all categories
        self.ascending = False
        self.posts: list[dict[str, Any]] = []
        self.has_more = True
        self.message: str | None = None

    async def load(self, *, append: bool = False) -> None:
        if not append:
            self.posts = []
            self.has_more = True
            self.message = None

        try:
            page = await self.api.list_posts(
                page=self.page,
                limit=self.page_size,
                category=self.category or None,
                ascending=self.ascending,
            )
        except (BraindumpError, httpx.HTTPError, ValueError) as e:
            _log.error("Error loading posts: %s", e)
            if not self.posts:
                self.message = LOAD_FAILED_MESSAGE
            return

        self.posts.extend(page)
        self.message = None
        if len(page) < self.page_size:
            self.has_more = False

    async def load_more(self) -> None:
        self.page += 1
        await self.load(append=True)

    async def set_category(self, category: str) -> None:
        self.category = category or ""
        self.page = 0
        await self.load()


class PostComposer:
    def __init__(
        self,
        api: BlogApiClient,
        *,
        alert: Alert = _log_alert,
        default_category: str = "thought",
    ) -> None:
        self.api = api
        self.alert = alert
        self.default_category = default_category
        self.title = ""
        self.content = ""
        self.category = default_category

    async def submit(self) -> dict[str, Any] | None:
        title = self.title.strip()
        content = self.content.strip()
        if not title or not content:
            self.alert("Please fill out both the title and content.")
            return None

        try:
            post = await self.api.create_post(
                title=title, content=content, category=self.category
            )
        except (BraindumpError, httpx.HTTPError, ValueError) as e:
            _log.error("Error inserting post: %s", e)
            self.alert("Failed to submit post.")
            return None

        self.title = ""
        self.content = ""
        self.category = self.default_category
        self.alert("Post created successfully!")
        return post
