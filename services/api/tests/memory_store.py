"""In-memory stand-in for the SQL document stores.

Behaves like SqlStore (id assignment, overwrite by id, audit stamping,
copies in and out) without a database. With `yield_control=True` every
call yields to the event loop once, so concurrent callers interleave
the way they would around real I/O.
"""

import asyncio
from collections.abc import AsyncIterator, Sequence
from typing import Generic, TypeVar
from uuid import uuid4

from pydantic import BaseModel

from message_api.stores.auditing import Auditor

DocT = TypeVar("DocT", bound=BaseModel)


class MemoryStore(Generic[DocT]):
    def __init__(self, auditor: Auditor | None = None, yield_control: bool = False) -> None:
        self.documents: dict[str, DocT] = {}
        self.saved_ids: list[str] = []
        self._auditor = auditor or Auditor()
        self._yield_control = yield_control

    async def _pause(self) -> None:
        if self._yield_control:
            await asyncio.sleep(0)

    async def save(self, document: DocT) -> DocT:
        await self._pause()
        existing = self.documents.get(document.id) if document.id else None
        audit = self._auditor.stamp(existing.audit if existing else None)
        stored = document.model_copy(deep=True, update={"id": document.id or str(uuid4()), "audit": audit})
        self.documents[stored.id] = stored
        self.saved_ids.append(stored.id)
        return stored.model_copy(deep=True)

    async def find_by_id(self, document_id: str) -> DocT | None:
        await self._pause()
        document = self.documents.get(document_id)
        return document.model_copy(deep=True) if document else None

    async def find_all(self) -> AsyncIterator[DocT]:
        await self._pause()
        for document in list(self.documents.values()):
            yield document.model_copy(deep=True)

    async def find_all_by_id(self, document_ids: Sequence[str]) -> list[DocT]:
        await self._pause()
        return [self.documents[i].model_copy(deep=True) for i in document_ids if i in self.documents]
