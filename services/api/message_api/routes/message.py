"""Message endpoints.

GET    /message                   - list messages
GET    /message/{id}              - fetch one message (200 with empty body if absent)
POST   /message                   - save a message
PUT    /message/{parentId}/reply  - save a reply and append it to the parent (200 with empty body if no parent)
PUT    /message                   - no-op (204)
DELETE /message                   - no-op (204)
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Response

from message_api.dependencies import get_message_service
from message_api.schemas import Message
from message_api.services.messages import InvalidReplyError, MessageService

router = APIRouter()


@router.get("", response_model=list[Message])
async def find_all_messages(messages: MessageService = Depends(get_message_service)) -> list[Message]:
    """List every message with replies resolved."""
    return [message async for message in messages.list_all()]


@router.get("/{message_id}", response_model=Message)
async def find_message_by_id(
    message_id: str = Path(description="Message ID", min_length=1, max_length=100),
    messages: MessageService = Depends(get_message_service),
) -> Message | Response:
    """Fetch a message by id."""
    message = await messages.find_by_id(message_id)
    if message is None:
        return Response(status_code=200)
    return message


@router.post("", response_model=Message)
async def persist_message(body: Message, messages: MessageService = Depends(get_message_service)) -> Message:
    """Save a message as-is (insert, or overwrite when `id` is given)."""
    return await messages.save_message(body)


@router.put("/{parent_message_id}/reply", response_model=Message)
async def persist_reply_message(
    body: Message,
    parent_message_id: str = Path(description="Parent message ID", min_length=1, max_length=100),
    messages: MessageService = Depends(get_message_service),
) -> Message | Response:
    """Save `body` as a reply and append it to the parent's replyIds.

    Returns:
        The updated parent message.

    Raises:
        HTTPException 422: If the reply is the parent itself.
    """
    try:
        parent = await messages.persist_reply_message(parent_message_id, body)
    except InvalidReplyError as e:
        raise HTTPException(
            status_code=422,
            detail={
                "error": {
                    "code": "INVALID_REPLY",
                    "message": str(e),
                    "detail": {"parent_message_id": parent_message_id},
                }
            },
        ) from e

    if parent is None:
        return Response(status_code=200)
    return parent


@router.api_route("", methods=["PUT", "DELETE"], status_code=204)
async def message_placeholder() -> Response:
    """Update/delete are not supported."""
    return Response(status_code=204)
