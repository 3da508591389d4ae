"""Feed endpoints.

GET    /feed       - list feeds
GET    /feed/{id}  - fetch one feed (200 with empty body if absent)
POST   /feed       - save the embedded message, then the feed
PUT    /feed       - no-op (204)
DELETE /feed       - no-op (204)

Routers are thin: call services for business logic.
"""

from fastapi import APIRouter, Depends, Path, Response

from message_api.dependencies import get_feed_service
from message_api.schemas import Feed, FeedCreate
from message_api.services.feeds import FeedService

router = APIRouter()


@router.get("", response_model=list[Feed])
async def fetch_feeds(feeds: FeedService = Depends(get_feed_service)) -> list[Feed]:
    """List every feed with its message resolved."""
    return [feed async for feed in feeds.fetch_all()]


@router.get("/{feed_id}", response_model=Feed)
async def fetch_feed_by_id(
    feed_id: str = Path(description="Feed ID", min_length=1, max_length=100),
    feeds: FeedService = Depends(get_feed_service),
) -> Feed | Response:
    """Fetch a feed by id."""
    feed = await feeds.fetch_by_id(feed_id)
    if feed is None:
        return Response(status_code=200)
    return feed


@router.post("", response_model=Feed)
async def persist_feed(body: FeedCreate, feeds: FeedService = Depends(get_feed_service)) -> Feed:
    """Create a feed.

    The embedded message is persisted first; the saved feed references it by id.
    """
    return await feeds.create_feed(body)


@router.api_route("", methods=["PUT", "DELETE"], status_code=204)
async def feed_placeholder() -> Response:
    """Update/delete are not supported."""
    return Response(status_code=204)
