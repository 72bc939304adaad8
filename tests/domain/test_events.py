"""Unit tests for domain events, the pending-events holder and identity helpers."""

from dataclasses import FrozenInstanceError
from uuid import uuid4

import pytest

from sms.domain.model.events import (
    ItemCancelledEvent,
    PendingEvents,
    SaleCancelledEvent,
    SaleCreatedEvent,
    SaleModifiedEvent,
)
from sms.domain.model.identity import identity_key, new_id, same_identity
from sms.domain.model.sale_item import SaleItem
from sms.domain.model.value_objects import Money, Product


class TestDomainEvents:

    def test_kinds(self):
        sale_id = uuid4()
        assert SaleCreatedEvent(sale_id, "S-1").kind == "SaleCreated"
        assert SaleModifiedEvent(sale_id, "S-1").kind == "SaleModified"
        assert SaleCancelledEvent(sale_id, "S-1").kind == "SaleCancelled"
        assert ItemCancelledEvent(sale_id, uuid4()).kind == "ItemCancelled"

    def test_occurred_at_is_set(self):
        event = SaleCreatedEvent(uuid4(), "S-1")
        assert event.occurred_at.tzinfo is not None

    def test_events_are_immutable(self):
        event = SaleCancelledEvent(uuid4(), "S-1")
        with pytest.raises(FrozenInstanceError):
            event.sale_number = "S-2"  # type: ignore[misc]


class TestPendingEvents:

    def test_record_keeps_order(self):
        pending = PendingEvents()
        first = pending.record(SaleCreatedEvent(uuid4(), "S-1"))
        second = pending.record(SaleCancelledEvent(uuid4(), "S-1"))
        assert list(pending) == [first, second]
        assert len(pending) == 2

    def test_pull_empties_holder(self):
        pending = PendingEvents()
        pending.record(SaleCreatedEvent(uuid4(), "S-1"))
        pulled = pending.pull()
        assert len(pulled) == 1
        assert len(pending) == 0
        assert pending.pull() == []

    def test_iterating_does_not_expose_internal_list(self):
        pending = PendingEvents()
        pending.record(SaleCreatedEvent(uuid4(), "S-1"))
        for _ in pending:
            pending.clear()
        assert len(pending) == 0


class TestIdentity:

    def _item(self) -> SaleItem:
        product = Product("P-1", "Widget", "A widget", "Tools", "Acme")
        return SaleItem.create(product, 1, Money.of("1"))

    def test_new_ids_are_unique(self):
        assert new_id() != new_id()

    def test_same_identity_ignores_state(self):
        item = self._item()
        twin = SaleItem.restore(item.id, item.product, 5, Money.of("9"))
        assert same_identity(item, twin)
        assert not same_identity(item, self._item())

    def test_identity_key_is_id_string(self):
        item = self._item()
        assert identity_key(item) == str(item.id)
