"""Store documents.

Documents are what the stores read and write. Cross-document links are
plain ids; turning them back into full entities is the services' job.
"""

from pydantic import BaseModel

from message_api.schemas.common import Audit
from message_api.schemas.message import MessageType


class MessageDocument(BaseModel):
    id: str | None = None
    message_type: MessageType | None = None
    text: str | None = None
    reply_ids: list[str] | None = None
    audit: Audit | None = None


class FeedDocument(BaseModel):
    id: str | None = None
    message_id: str | None = None
    audit: Audit | None = None


class UserDocument(BaseModel):
    id: str | None = None
    name: str | None = None
    audit: Audit | None = None
