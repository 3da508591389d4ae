"""Feed model.

A feed points at one message by id. There is no foreign key: the
message is saved before the feed, and nothing is ever deleted.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from message_api.models.audit import AuditColumns
from message_api.models.message import generate_document_id
from message_api.stores.postgres import Base


class FeedRecord(AuditColumns, Base):
    """Stored feed entry."""

    __tablename__ = "feeds"

    id: Mapped[str] = mapped_column(String(100), primary_key=True, default=generate_document_id)
    message_id: Mapped[str | None] = mapped_column(String(100), index=True)

    def __repr__(self) -> str:
        return f"<FeedRecord {self.id} -> {self.message_id}>"
