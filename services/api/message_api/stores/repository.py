"""Generic document repositories over SQLAlchemy.

Every entity gets the same four operations:
- save: insert (id assigned if absent) or full overwrite by id
- find_by_id: one document or None
- find_all: lazy, one-pass async iterator over every document
- find_all_by_id: documents for a list of ids, in the given order,
  skipping ids that do not exist

Each call runs in its own session/transaction.
"""

import json
from collections.abc import AsyncIterator, Sequence
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel
from sqlalchemy import select

from message_api.models import FeedRecord, MessageRecord, UserRecord, generate_document_id
from message_api.models.audit import AuditColumns
from message_api.schemas.common import Audit
from message_api.stores.auditing import Auditor
from message_api.stores.documents import FeedDocument, MessageDocument, UserDocument
from message_api.stores.postgres import get_session

DocT = TypeVar("DocT", bound=BaseModel)
RecordT = TypeVar("RecordT", bound=AuditColumns)


class Store(Protocol[DocT]):
    """Persistence capability for one document type."""

    async def save(self, document: DocT) -> DocT: ...

    async def find_by_id(self, document_id: str) -> DocT | None: ...

    def find_all(self) -> AsyncIterator[DocT]: ...

    async def find_all_by_id(self, document_ids: Sequence[str]) -> list[DocT]: ...


def _audit_of(record: AuditColumns) -> Audit:
    return Audit(
        created_on=record.created_on,
        updated_on=record.updated_on,
        created_by=record.created_by,
        modified_by=record.modified_by,
    )


class SqlStore(Generic[DocT, RecordT]):
    """Store implementation shared by all entity tables.

    Subclasses set `record_cls` and map fields both ways.
    """

    record_cls: type[RecordT]

    def __init__(self, auditor: Auditor | None = None) -> None:
        self._auditor = auditor or Auditor()

    def _to_document(self, record: RecordT) -> DocT:
        raise NotImplementedError

    def _apply(self, record: RecordT, document: DocT) -> None:
        """Copy document fields (except id and audit) onto the record."""
        raise NotImplementedError

    async def save(self, document: DocT) -> DocT:
        document_id = getattr(document, "id", None)
        async with get_session() as session:
            record = await session.get(self.record_cls, document_id) if document_id else None
            audit = self._auditor.stamp(_audit_of(record) if record is not None else None)

            if record is None:
                record = self.record_cls(id=document_id or generate_document_id())
                session.add(record)

            self._apply(record, document)
            record.created_on = audit.created_on
            record.updated_on = audit.updated_on
            record.created_by = audit.created_by
            record.modified_by = audit.modified_by

            await session.flush()
            # Re-read so the result matches what find_by_id returns
            await session.refresh(record)
            return self._to_document(record)

    async def find_by_id(self, document_id: str) -> DocT | None:
        async with get_session() as session:
            record = await session.get(self.record_cls, document_id)
            return self._to_document(record) if record is not None else None

    async def find_all(self) -> AsyncIterator[DocT]:
        async with get_session() as session:
            result = await session.stream_scalars(
                select(self.record_cls).order_by(self.record_cls.created_on, self.record_cls.id)
            )
            async for record in result:
                yield self._to_document(record)

    async def find_all_by_id(self, document_ids: Sequence[str]) -> list[DocT]:
        if not document_ids:
            return []
        async with get_session() as session:
            result = await session.scalars(
                select(self.record_cls).where(self.record_cls.id.in_(set(document_ids)))
            )
            by_id = {record.id: self._to_document(record) for record in result.all()}
        return [by_id[i] for i in document_ids if i in by_id]


class MessageStore(SqlStore[MessageDocument, MessageRecord]):
    record_cls = MessageRecord

    def _to_document(self, record: MessageRecord) -> MessageDocument:
        reply_ids = json.loads(record.reply_ids_json) if record.reply_ids_json else None
        return MessageDocument(
            id=record.id,
            message_type=record.message_type,
            text=record.text,
            reply_ids=reply_ids,
            audit=_audit_of(record),
        )

    def _apply(self, record: MessageRecord, document: MessageDocument) -> None:
        record.message_type = document.message_type
        record.text = document.text
        record.reply_ids_json = json.dumps(document.reply_ids) if document.reply_ids is not None else None


class FeedStore(SqlStore[FeedDocument, FeedRecord]):
    record_cls = FeedRecord

    def _to_document(self, record: FeedRecord) -> FeedDocument:
        return FeedDocument(id=record.id, message_id=record.message_id, audit=_audit_of(record))

    def _apply(self, record: FeedRecord, document: FeedDocument) -> None:
        record.message_id = document.message_id


class UserStore(SqlStore[UserDocument, UserRecord]):
    record_cls = UserRecord

    def _to_document(self, record: UserRecord) -> UserDocument:
        return UserDocument(id=record.id, name=record.name, audit=_audit_of(record))

    def _apply(self, record: UserRecord, document: UserDocument) -> None:
        record.name = document.name
