"""Audit stamping for store writes.

Every save goes through an Auditor, which fills createdOn/createdBy on
first write and updatedOn/modifiedBy on every write. The clock and the
current actor are explicit inputs so tests can pin them.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone

from message_api.schemas.common import Audit

# Actor for the current request (set by the HTTP middleware)
_current_actor: ContextVar[str | None] = ContextVar("current_actor", default=None)


def current_actor() -> str | None:
    """Actor performing the current write, if known."""
    return _current_actor.get()


@contextmanager
def acting_as(actor: str | None) -> Iterator[None]:
    """Run a block with the given actor recorded on writes."""
    token = _current_actor.set(actor)
    try:
        yield
    finally:
        _current_actor.reset(token)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Auditor:
    """Computes the audit block for a write."""

    clock: Callable[[], datetime] = field(default=utcnow)
    actor: Callable[[], str | None] = field(default=current_actor)

    def stamp(self, existing: Audit | None) -> Audit:
        """Audit for a write over `existing` (None for a new document)."""
        now = self.clock()
        who = self.actor()
        if existing is None or existing.created_on is None:
            return Audit(created_on=now, updated_on=now, created_by=who, modified_by=who)
        return existing.model_copy(update={"updated_on": now, "modified_by": who})
