"""Domain events raised by the Sale aggregate.

Events are immutable facts.  The aggregate records them in a
``PendingEvents`` holder; the application layer drains that holder after
the aggregate has been persisted and hands each event to its subscribers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, Union
from uuid import UUID


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SaleCreatedEvent:
    sale_id: UUID
    sale_number: str
    occurred_at: datetime = field(default_factory=utc_now)

    kind = "SaleCreated"


@dataclass(frozen=True)
class SaleModifiedEvent:
    sale_id: UUID
    sale_number: str
    occurred_at: datetime = field(default_factory=utc_now)

    kind = "SaleModified"


@dataclass(frozen=True)
class SaleCancelledEvent:
    sale_id: UUID
    sale_number: str
    occurred_at: datetime = field(default_factory=utc_now)

    kind = "SaleCancelled"


@dataclass(frozen=True)
class ItemCancelledEvent:
    """An item was removed from an active sale."""

    sale_id: UUID
    item_id: UUID
    occurred_at: datetime = field(default_factory=utc_now)

    kind = "ItemCancelled"


DomainEvent = Union[
    SaleCreatedEvent, SaleModifiedEvent, SaleCancelledEvent, ItemCancelledEvent
]


class PendingEvents:
    """Ordered list of events raised but not yet dispatched.

    Embedded in an aggregate rather than inherited, so any entity that
    needs to raise events can hold one.
    """

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []

    def record(self, event: DomainEvent) -> DomainEvent:
        self._events.append(event)
        return event

    def pull(self) -> list[DomainEvent]:
        """Return every pending event and forget them."""
        events, self._events = self._events, []
        return events

    def clear(self) -> None:
        self._events.clear()

    def __iter__(self) -> Iterator[DomainEvent]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        return f"PendingEvents({[e.kind for e in self._events]})"
