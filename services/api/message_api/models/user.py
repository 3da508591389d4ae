"""User model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from message_api.models.audit import AuditColumns
from message_api.models.message import generate_document_id
from message_api.stores.postgres import Base


class UserRecord(AuditColumns, Base):
    """Stored user."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(100), primary_key=True, default=generate_document_id)
    name: Mapped[str | None] = mapped_column(String(200))

    def __repr__(self) -> str:
        return f"<UserRecord {self.id} {self.name}>"
