"""Service wiring for FastAPI dependencies.

Routes get services via Depends(...); tests swap them with
app.dependency_overrides.
"""

from functools import lru_cache

from message_api.services.feeds import FeedService
from message_api.services.messages import MessageService
from message_api.settings import get_settings
from message_api.stores.auditing import Auditor
from message_api.stores.locks import KeyedLocks, LocalLocks, RedisLocks
from message_api.stores.repository import FeedStore, MessageStore


@lru_cache
def get_reply_locks() -> KeyedLocks:
    """Lock backend for reply appends, per REPLY_LOCK_BACKEND."""
    settings = get_settings()
    if settings.reply_lock_backend == "redis":
        return RedisLocks(ttl=settings.reply_lock_ttl_seconds, wait=settings.reply_lock_wait_seconds)
    return LocalLocks(wait=settings.reply_lock_wait_seconds)


@lru_cache
def get_message_service() -> MessageService:
    return MessageService(MessageStore(Auditor()), get_reply_locks())


@lru_cache
def get_feed_service() -> FeedService:
    return FeedService(FeedStore(Auditor()), get_message_service())
