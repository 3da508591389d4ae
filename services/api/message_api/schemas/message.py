"""Schemas for /message endpoints."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from message_api.schemas.common import Audit


class MessageType(str, Enum):
    """Kind of message."""

    REPLY = "REPLY"
    FEED = "FEED"


class Message(BaseModel):
    """A message with its replies resolved.

    On input, `replyIds` entries are references: only their `id` is used.
    On output, each entry is the full reply message.
    """

    id: str | None = None
    message_type: MessageType | None = Field(alias="messageType", default=None)
    text: str | None = None
    reply_ids: list["Message"] | None = Field(alias="replyIds", default=None)
    audit: Audit | None = None

    model_config = {"populate_by_name": True}

    @field_validator("reply_ids")
    @classmethod
    def _references_have_ids(cls, v: list["Message"] | None) -> list["Message"] | None:
        if v and any(not reply.id for reply in v):
            raise ValueError("reply references must carry an id")
        return v

    @model_validator(mode="after")
    def _not_own_reply(self) -> "Message":
        if self.id and self.reply_ids and any(reply.id == self.id for reply in self.reply_ids):
            raise ValueError("a message cannot be its own reply")
        return self


Message.model_rebuild()
