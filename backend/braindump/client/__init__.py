"""
Client side of the blog: resilient fetch, heartbeat and post views.
"""

from .api import BlogApiClient
from .feed import LOAD_FAILED_MESSAGE, PostComposer, PostFeed
from .fetch import fetch_with_retry, retry_delay
from .heartbeat import ConnectionStatus, Heartbeat

__all__ = [
    "BlogApiClient",
    "ConnectionStatus",
    "Heartbeat",
    "LOAD_FAILED_MESSAGE",
    "PostComposer",
    "PostFeed",
    "fetch_with_retry",
    "retry_delay",
]
