"""SQLAlchemy ORM models.

Models represent document tables:
- messages: Messages and their ordered reply ids
- feeds: Feed entries referencing a message
- users: Users (placeholder routes only)
"""

from message_api.models.feed import FeedRecord
from message_api.models.message import MessageRecord, generate_document_id
from message_api.models.user import UserRecord

__all__ = ["FeedRecord", "MessageRecord", "UserRecord", "generate_document_id"]
