"""Pydantic schemas for API request/response validation."""

from message_api.schemas.common import Audit, ErrorDetail, ErrorResponse
from message_api.schemas.feed import Feed, FeedCreate
from message_api.schemas.message import Message, MessageType

__all__ = [
    "Audit",
    "ErrorDetail",
    "ErrorResponse",
    "Feed",
    "FeedCreate",
    "Message",
    "MessageType",
]
