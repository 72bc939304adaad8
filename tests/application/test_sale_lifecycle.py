"""Integration tests for the Update, Cancel, CancelItem, Delete and Show use cases."""

from uuid import UUID, uuid4

import pytest

from sms.application.cancel_sale import CancelSaleHandler
from sms.application.cancel_sale_item import CancelSaleItemHandler
from sms.application.create_sale import CreateSaleHandler
from sms.application.delete_sale import DeleteSaleHandler
from sms.application.event_dispatcher import SaleEventDispatcher
from sms.application.show_sale import ShowSaleHandler
from sms.application.update_sale import UpdateSaleHandler
from sms.domain.exceptions import EntityNotFoundError, InvalidStateError
from sms.domain.model.events import (
    ItemCancelledEvent,
    SaleCancelledEvent,
    SaleModifiedEvent,
)
from sms.domain.model.sale import SaleStatus
from tests.fakes import (
    FakeSaleRepository,
    RecordingSubscriber,
    branch_spec,
    customer_spec,
    item_spec,
    sale_request,
)


def _setup():
    sale_repo = FakeSaleRepository()
    dispatcher = SaleEventDispatcher()
    recorder = RecordingSubscriber()
    for event_type in (SaleModifiedEvent, SaleCancelledEvent, ItemCancelledEvent):
        dispatcher.subscribe(event_type, recorder)

    dto = CreateSaleHandler(sale_repo, dispatcher).handle(
        sale_request(
            items=[
                item_spec("A", quantity=2, unit_price="5"),
                item_spec("B", quantity=10, unit_price="3"),
            ]
        )
    )
    return sale_repo, dispatcher, recorder, UUID(dto.id)


class TestUpdateSale:

    def test_replaces_customer_and_branch(self):
        sale_repo, dispatcher, recorder, sale_id = _setup()
        handler = UpdateSaleHandler(sale_repo, dispatcher)

        dto = handler.handle(
            sale_id, customer_spec("C-2", "Bob"), branch_spec("B-2", "Uptown")
        )

        assert dto.customer_name == "Bob"
        assert dto.branch_name == "Uptown"
        assert dto.updated_at is not None
        saved = sale_repo.get_by_id(sale_id)
        assert saved.customer.external_id == "C-2"
        assert recorder.kinds == ["SaleModified"]

    def test_unknown_sale_rejected(self):
        sale_repo, dispatcher, _, _ = _setup()
        handler = UpdateSaleHandler(sale_repo, dispatcher)
        with pytest.raises(EntityNotFoundError, match="not found"):
            handler.handle(uuid4(), customer_spec(), branch_spec())

    def test_cancelled_sale_rejected(self):
        sale_repo, dispatcher, recorder, sale_id = _setup()
        CancelSaleHandler(sale_repo, dispatcher).handle(sale_id)
        handler = UpdateSaleHandler(sale_repo, dispatcher)
        with pytest.raises(InvalidStateError):
            handler.handle(sale_id, customer_spec("C-2", "Bob"), branch_spec())
        assert sale_repo.get_by_id(sale_id).customer.external_id == "C-1"
        assert recorder.kinds == ["SaleCancelled"]


class TestCancelSale:

    def test_cancels_and_keeps_sale(self):
        sale_repo, dispatcher, recorder, sale_id = _setup()
        dto = CancelSaleHandler(sale_repo, dispatcher).handle(sale_id)
        assert dto.status == "Cancelled"
        assert sale_repo.get_by_id(sale_id).status == SaleStatus.CANCELLED
        assert recorder.kinds == ["SaleCancelled"]

    def test_cancel_twice_rejected(self):
        sale_repo, dispatcher, recorder, sale_id = _setup()
        handler = CancelSaleHandler(sale_repo, dispatcher)
        handler.handle(sale_id)
        with pytest.raises(InvalidStateError, match="already cancelled"):
            handler.handle(sale_id)
        assert recorder.kinds == ["SaleCancelled"]

    def test_unknown_sale_rejected(self):
        sale_repo, dispatcher, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            CancelSaleHandler(sale_repo, dispatcher).handle(uuid4())


class TestCancelSaleItem:

    def test_removes_item_and_recomputes_total(self):
        sale_repo, dispatcher, recorder, sale_id = _setup()
        item_a = sale_repo.get_by_id(sale_id).items[0]

        dto = CancelSaleItemHandler(sale_repo, dispatcher).handle(sale_id, item_a.id)

        assert dto.total_amount == "$24.00"
        assert [i.product_name for i in dto.items] == ["B"]
        assert recorder.kinds == ["ItemCancelled"]
        assert recorder.events[0].item_id == item_a.id

    def test_unknown_item_changes_nothing(self):
        sale_repo, dispatcher, recorder, sale_id = _setup()
        dto = CancelSaleItemHandler(sale_repo, dispatcher).handle(sale_id, uuid4())
        assert dto.total_amount == "$34.00"
        assert len(dto.items) == 2
        assert recorder.events == []

    def test_cancelled_sale_rejected(self):
        sale_repo, dispatcher, _, sale_id = _setup()
        item_id = sale_repo.get_by_id(sale_id).items[0].id
        CancelSaleHandler(sale_repo, dispatcher).handle(sale_id)
        with pytest.raises(InvalidStateError):
            CancelSaleItemHandler(sale_repo, dispatcher).handle(sale_id, item_id)


class TestDeleteSale:

    def test_hard_deletes(self):
        sale_repo, _, _, sale_id = _setup()
        number = DeleteSaleHandler(sale_repo).handle(sale_id)
        assert number == "S-0001"
        assert sale_repo.get_by_id(sale_id) is None
        assert not sale_repo.sale_number_exists("S-0001")

    def test_cancelled_sale_can_be_deleted(self):
        sale_repo, dispatcher, _, sale_id = _setup()
        CancelSaleHandler(sale_repo, dispatcher).handle(sale_id)
        DeleteSaleHandler(sale_repo).handle(sale_id)
        assert sale_repo.count() == 0

    def test_unknown_sale_rejected(self):
        sale_repo, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            DeleteSaleHandler(sale_repo).handle(uuid4())


class TestShowSale:

    def test_by_id(self):
        sale_repo, _, _, sale_id = _setup()
        dto = ShowSaleHandler(sale_repo).handle(sale_id)
        assert dto.id == str(sale_id)
        assert dto.total_amount == "$34.00"
        assert [i.discount_percentage for i in dto.items] == ["0%", "20%"]

    def test_by_number(self):
        sale_repo, _, _, sale_id = _setup()
        dto = ShowSaleHandler(sale_repo).handle_by_number("S-0001")
        assert dto.id == str(sale_id)

    def test_missing(self):
        sale_repo, _, _, _ = _setup()
        handler = ShowSaleHandler(sale_repo)
        with pytest.raises(EntityNotFoundError):
            handler.handle(uuid4())
        with pytest.raises(EntityNotFoundError, match="S-404"):
            handler.handle_by_number("S-404")
