#!/usr/bin/env python3
"""Seed database with demo data.

Creates:
- A demo user
- A feed message with one reply
- A feed entry pointing at that message

Fixed ids make the script idempotent: re-running overwrites the same
documents (the reply list is rebuilt, not appended to again).

Usage:
    cd services/api
    python -m scripts.seed
"""

import asyncio
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from message_api.schemas import FeedCreate, Message, MessageType
from message_api.services.feeds import FeedService
from message_api.services.messages import MessageService
from message_api.stores.auditing import Auditor, acting_as
from message_api.stores.documents import UserDocument
from message_api.stores.locks import LocalLocks
from message_api.stores.postgres import close_db, create_tables, init_db
from message_api.stores.repository import FeedStore, MessageStore, UserStore

load_dotenv()

SEED_ACTOR = "seed"
DEMO_USER = UserDocument(id="demo-user", name="Demo User")
WELCOME_MESSAGE = Message(id="welcome", message_type=MessageType.FEED, text="Welcome to the feed!", reply_ids=[])
WELCOME_REPLY = Message(id="welcome-reply", message_type=MessageType.REPLY, text="Glad to be here.")
WELCOME_FEED_ID = "welcome-feed"


async def seed() -> None:
    await init_db()
    await create_tables()

    auditor = Auditor()
    messages = MessageService(MessageStore(auditor), LocalLocks())
    feeds = FeedService(FeedStore(auditor), messages)

    try:
        with acting_as(SEED_ACTOR):
            user = await UserStore(auditor).save(DEMO_USER)
            print(f"User: {user.id}")

            feed = await feeds.create_feed(FeedCreate(id=WELCOME_FEED_ID, message=WELCOME_MESSAGE))
            print(f"Feed: {feed.id} -> message {feed.message.id if feed.message else None}")

            parent = await messages.persist_reply_message(WELCOME_MESSAGE.id, WELCOME_REPLY)
            replies = parent.reply_ids if parent else []
            print(f"Replies on {WELCOME_MESSAGE.id}: {[r.id for r in replies or []]}")
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(seed())
