"""Message model.

A message and the ordered ids of its replies.
Reply ids are kept as a JSON array; they reference other rows in
this table without a foreign key.
"""

from uuid import uuid4

from sqlalchemy import Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from message_api.models.audit import AuditColumns
from message_api.schemas.message import MessageType
from message_api.stores.postgres import Base


def generate_document_id() -> str:
    """Generate unique document ID."""
    return str(uuid4())


class MessageRecord(AuditColumns, Base):
    """Stored message."""

    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String(100), primary_key=True, default=generate_document_id)

    message_type: Mapped[MessageType | None] = mapped_column(Enum(MessageType))
    text: Mapped[str | None] = mapped_column(Text)

    # Reply ids (JSON array, ordered); NULL until the message gets a reply list
    reply_ids_json: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<MessageRecord {self.id} {self.message_type}>"
