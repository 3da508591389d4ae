"""Feed service.

Feeds reference one message by id. Creating a feed saves the embedded
message first and only then the feed; if the message save fails, no
feed is written.
"""

from collections.abc import AsyncIterator

from message_api.schemas import Feed, FeedCreate
from message_api.services.messages import MessageService
from message_api.stores.documents import FeedDocument
from message_api.stores.repository import Store


class FeedService:
    """Feed operations on top of a document store."""

    def __init__(self, store: Store[FeedDocument], messages: MessageService) -> None:
        self._store = store
        self._messages = messages

    async def save_feed(self, feed: Feed) -> Feed:
        """Persist as-is. The feed's message must already be saved."""
        document = FeedDocument(
            id=feed.id,
            message_id=feed.message.id if feed.message else None,
        )
        return await self.resolve(await self._store.save(document))

    async def fetch_by_id(self, feed_id: str) -> Feed | None:
        document = await self._store.find_by_id(feed_id)
        if document is None:
            return None
        return await self.resolve(document)

    async def fetch_all(self) -> AsyncIterator[Feed]:
        async for document in self._store.find_all():
            yield await self.resolve(document)

    async def create_feed(self, feed: FeedCreate) -> Feed:
        """Save the embedded message, then the feed pointing at it."""
        message = await self._messages.save_message(feed.message)
        return await self.save_feed(Feed(id=feed.id, message=message))

    async def resolve(self, document: FeedDocument) -> Feed:
        message = None
        if document.message_id:
            message = await self._messages.find_by_id(document.message_id)
        return Feed(id=document.id, message=message, audit=document.audit)
