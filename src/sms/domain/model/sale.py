"""Sale aggregate — the core of the domain.

The Sale is an aggregate root that owns its items.
All business invariants are enforced here:

- the total always equals the sum of the current items' totals
- a cancelled sale accepts no further changes
- the only status transition is ACTIVE -> CANCELLED
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable
from uuid import UUID

from sms.domain.exceptions import InvalidStateError, ValidationError
from sms.domain.model.events import (
    DomainEvent,
    ItemCancelledEvent,
    PendingEvents,
    SaleCancelledEvent,
    SaleCreatedEvent,
    SaleModifiedEvent,
    utc_now,
)
from sms.domain.model.identity import new_id
from sms.domain.model.sale_item import SaleItem
from sms.domain.model.value_objects import Branch, Customer, Money


class SaleStatus(Enum):
    ACTIVE = "Active"
    CANCELLED = "Cancelled"


@dataclass(eq=False)
class Sale:
    """Aggregate root for sales.

    Use the ``Sale.create()`` factory for new sales — it starts them ACTIVE,
    stamps them with the current time and raises ``SaleCreatedEvent``.
    The ``__init__`` takes the full state as-is so the repository can
    reconstitute persisted sales (status and timestamps included) without
    re-running the factory.

    Mutating methods return the events they raised; the same events stay
    pending on the aggregate until ``pull_events()`` is called.
    """

    id: UUID
    sale_number: str
    sale_date: datetime
    customer: Customer
    branch: Branch
    items: list[SaleItem] = field(default_factory=list)
    status: SaleStatus = SaleStatus.ACTIVE
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime | None = None
    events: PendingEvents = field(default_factory=PendingEvents, repr=False)

    # --- Factory (used for NEW sales only) ------------------------------------

    @staticmethod
    def create(
        sale_number: str,
        customer: Customer,
        branch: Branch,
        items: Iterable[SaleItem],
    ) -> Sale:
        """Assemble a new ACTIVE sale.

        Sale number uniqueness is the caller's concern (a repository
        lookup), not the aggregate's.
        """
        if not sale_number or not sale_number.strip():
            raise ValidationError("Sale number is required", field="sale_number")

        now = utc_now()
        sale = Sale(
            id=new_id(),
            sale_number=sale_number.strip(),
            sale_date=now,
            customer=customer,
            branch=branch,
            created_at=now,
        )
        for item in items:
            sale.add_item(item)
        # Assembling the sale is not an update.
        sale.updated_at = None

        sale.events.record(SaleCreatedEvent(sale.id, sale.sale_number))
        return sale

    # --- Item management ------------------------------------------------------

    def add_item(self, item: SaleItem) -> list[DomainEvent]:
        self._ensure_active("Cannot add items to a cancelled sale")
        if self.items and item.unit_price.currency != self.currency:
            raise ValidationError(
                f"Cannot mix {item.unit_price.currency} items into a "
                f"{self.currency} sale",
                field="unit_price",
            )
        self.items.append(item)
        self.updated_at = utc_now()
        return []

    def remove_item(self, item_id: UUID) -> list[DomainEvent]:
        """Remove the item with *item_id*.

        An unknown id is ignored: nothing changes and no event is raised.
        """
        self._ensure_active("Cannot remove items from a cancelled sale")

        item = self.find_item(item_id)
        if item is None:
            return []

        self.items.remove(item)
        self.updated_at = utc_now()
        return [self.events.record(ItemCancelledEvent(self.id, item_id))]

    def find_item(self, item_id: UUID) -> SaleItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    # --- State transitions ----------------------------------------------------

    def update(self, customer: Customer, branch: Branch) -> list[DomainEvent]:
        """Replace customer and branch together."""
        self._ensure_active("Cannot update a cancelled sale")

        self.customer = customer
        self.branch = branch
        self.updated_at = utc_now()
        return [self.events.record(SaleModifiedEvent(self.id, self.sale_number))]

    def cancel(self) -> list[DomainEvent]:
        """Transition ACTIVE -> CANCELLED."""
        if self.status == SaleStatus.CANCELLED:
            raise InvalidStateError("Sale is already cancelled")

        self.status = SaleStatus.CANCELLED
        self.updated_at = utc_now()
        return [self.events.record(SaleCancelledEvent(self.id, self.sale_number))]

    # --- Events ---------------------------------------------------------------

    def pull_events(self) -> list[DomainEvent]:
        return self.events.pull()

    def clear_events(self) -> None:
        self.events.clear()

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        # Re-summed on every read so it tracks item updates as well.
        result = Money.zero(self.currency)
        for item in self.items:
            result = result + item.total_amount
        return result

    @property
    def currency(self) -> str:
        if self.items:
            return self.items[0].unit_price.currency
        return "USD"

    @property
    def is_active(self) -> bool:
        return self.status == SaleStatus.ACTIVE

    @property
    def is_cancelled(self) -> bool:
        return self.status == SaleStatus.CANCELLED

    # --- Internal helpers -----------------------------------------------------

    def _ensure_active(self, message: str) -> None:
        if self.status != SaleStatus.ACTIVE:
            raise InvalidStateError(message)
