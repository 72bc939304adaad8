"""Delivery of domain events to subscribers.

Handlers call ``dispatcher.dispatch(sale)`` once the sale has been
persisted.  The dispatcher pulls the aggregate's pending events (which
clears them) and invokes every subscriber registered for each event type.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable

from sms.domain.model.events import (
    DomainEvent,
    ItemCancelledEvent,
    SaleCancelledEvent,
    SaleCreatedEvent,
    SaleModifiedEvent,
)
from sms.domain.model.sale import Sale

logger = logging.getLogger(__name__)

EventSubscriber = Callable[[DomainEvent], None]


class SaleEventDispatcher:

    def __init__(self) -> None:
        self._subscribers: dict[type, list[EventSubscriber]] = defaultdict(list)

    def subscribe(self, event_type: type, subscriber: EventSubscriber) -> None:
        self._subscribers[event_type].append(subscriber)

    def dispatch(self, sale: Sale) -> list[DomainEvent]:
        """Deliver and clear the sale's pending events.  Returns them."""
        events = sale.pull_events()
        for event in events:
            subscribers = self._subscribers.get(type(event), [])
            if not subscribers:
                logger.debug("No subscribers for %s", event.kind)
            for subscriber in subscribers:
                subscriber(event)
        return events


class LoggingSaleEventHandler:
    """Writes one INFO line per sale event."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def register(self, dispatcher: SaleEventDispatcher) -> None:
        for event_type in (
            SaleCreatedEvent,
            SaleModifiedEvent,
            SaleCancelledEvent,
            ItemCancelledEvent,
        ):
            dispatcher.subscribe(event_type, self)

    def __call__(self, event: DomainEvent) -> None:
        if isinstance(event, ItemCancelledEvent):
            self._log.info(
                "%s event received: sale=%s item=%s occurred_at=%s",
                event.kind,
                event.sale_id,
                event.item_id,
                event.occurred_at.isoformat(),
            )
        else:
            self._log.info(
                "%s event received: sale=%s number=%s occurred_at=%s",
                event.kind,
                event.sale_id,
                event.sale_number,
                event.occurred_at.isoformat(),
            )


def default_dispatcher() -> SaleEventDispatcher:
    """A dispatcher with the logging subscriber already attached."""
    dispatcher = SaleEventDispatcher()
    LoggingSaleEventHandler().register(dispatcher)
    return dispatcher
