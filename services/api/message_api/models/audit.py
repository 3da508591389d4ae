"""Audit columns shared by every document table."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column


class AuditColumns:
    """Mixin adding audit columns. Values are stamped by the store, not the DB."""

    created_on: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    updated_on: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_by: Mapped[str | None] = mapped_column(String(200))
    modified_by: Mapped[str | None] = mapped_column(String(200))
