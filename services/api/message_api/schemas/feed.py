"""Schemas for /feed endpoints."""

from pydantic import BaseModel

from message_api.schemas.common import Audit
from message_api.schemas.message import Message


class Feed(BaseModel):
    """A feed entry pointing at one message (resolved in responses)."""

    id: str | None = None
    message: Message | None = None
    audit: Audit | None = None


class FeedCreate(BaseModel):
    """Request body for POST /feed.

    The embedded message is saved first, then the feed referencing it.
    """

    id: str | None = None
    message: Message
    audit: Audit | None = None
