"""Message service.

Saves, fetches and lists messages, and appends replies to a parent.

Stores keep replies as ordered id lists; this service resolves them back
into full messages (recursively, in stored order). Dangling ids are
skipped; a message that reappears further down its own thread is emitted
as an id-only stub to break the cycle.

Reply append is a read-modify-write on the parent, so it runs under a
per-parent lock: concurrent replies to one parent all survive.
"""

import logging
from collections.abc import AsyncIterator

from message_api.schemas import Message
from message_api.stores.documents import MessageDocument
from message_api.stores.locks import KeyedLocks
from message_api.stores.repository import Store

logger = logging.getLogger("uvicorn.error")


class InvalidReplyError(ValueError):
    """The reply payload cannot be attached to the requested parent."""


def to_document(message: Message) -> MessageDocument:
    """Turn an API message into a store document (references become ids)."""
    reply_ids = None
    if message.reply_ids is not None:
        reply_ids = [reply.id for reply in message.reply_ids if reply.id]
    return MessageDocument(
        id=message.id,
        message_type=message.message_type,
        text=message.text,
        reply_ids=reply_ids,
    )


def parent_lock_key(parent_id: str) -> str:
    return f"message:{parent_id}"


class MessageService:
    """Message operations on top of a document store."""

    def __init__(self, store: Store[MessageDocument], locks: KeyedLocks) -> None:
        self._store = store
        self._locks = locks

    async def save_message(self, message: Message) -> Message:
        """Persist as-is: insert when id is absent, full overwrite otherwise."""
        saved = await self._store.save(to_document(message))
        return await self.resolve(saved)

    async def find_by_id(self, message_id: str) -> Message | None:
        document = await self._store.find_by_id(message_id)
        if document is None:
            return None
        return await self.resolve(document)

    async def list_all(self) -> AsyncIterator[Message]:
        async for document in self._store.find_all():
            yield await self.resolve(document)

    async def persist_reply_message(self, parent_id: str, message: Message) -> Message | None:
        """Save `message` and append it to the parent's replies.

        Args:
            parent_id: Parent message id.
            message: Reply payload (saved as-is first).

        Returns:
            The saved parent with replies resolved, or None if the parent
            does not exist. The reply itself is saved either way.

        Raises:
            InvalidReplyError: If the payload is the parent itself.
        """
        if message.id == parent_id:
            raise InvalidReplyError("a message cannot reply to itself")

        reply = await self._store.save(to_document(message))

        async with self._locks.hold(parent_lock_key(parent_id)):
            parent = await self._store.find_by_id(parent_id)
            if parent is None:
                logger.info("Reply %s saved but parent %s not found", reply.id, parent_id)
                return None
            parent.reply_ids = [*(parent.reply_ids or []), reply.id]
            saved = await self._store.save(parent)

        logger.info("Reply %s appended to %s (%d replies)", reply.id, parent_id, len(saved.reply_ids or []))
        return await self.resolve(saved)

    async def resolve(self, document: MessageDocument, _path: frozenset[str] = frozenset()) -> Message:
        """Build the API message for `document`, loading its replies."""
        replies = None
        if document.reply_ids is not None:
            path = _path | {document.id}
            reply_ids = [i for i in document.reply_ids if i != document.id]
            loaded = await self._store.find_all_by_id([i for i in reply_ids if i not in path])
            by_id = {d.id: d for d in loaded}
            replies = []
            for reply_id in reply_ids:
                if reply_id in path:
                    replies.append(Message(id=reply_id))
                elif reply_id in by_id:
                    replies.append(await self.resolve(by_id[reply_id], path))

        return Message(
            id=document.id,
            message_type=document.message_type,
            text=document.text,
            reply_ids=replies,
            audit=document.audit,
        )
