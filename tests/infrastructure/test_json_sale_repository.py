"""Tests for the JSON-file-backed SaleRepository (uses pytest's tmp_path)."""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from sms.domain.exceptions import EntityNotFoundError
from sms.domain.model.sale import Sale, SaleStatus
from sms.domain.model.sale_item import SaleItem
from sms.domain.model.value_objects import Branch, Customer, Money, Product
from sms.domain.repository.sale_repository import SaleFilter, SaleOrdering
from sms.infrastructure.persistence.json_sale_repository import JsonSaleRepository

CUSTOMER = Customer("C-1", "Alice", "alice@example.com", "555-0101")
BRANCH = Branch("B-1", "Downtown", "1 Main St", "Springfield", "SP")


def _sale(number: str = "S-0001", qty: int = 5, price: str = "10.00") -> Sale:
    product = Product("P-1", "Lager", "Canned lager", "Beverages", "Acme")
    return Sale.create(number, CUSTOMER, BRANCH, [SaleItem.create(product, qty, Money.of(price))])


@pytest.fixture
def repo(tmp_path):
    return JsonSaleRepository(tmp_path / "data" / "sales.json")


class TestJsonSaleRepository:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "sales.json"
        JsonSaleRepository(path)
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_round_trip_preserves_state(self, repo):
        sale = _sale()
        sale.add_item(
            SaleItem.create(Product("P-2", "Chips", "Salted", "Snacks", "Crunch"), 12, Money.of("2.25"))
        )
        sale.cancel()
        repo.add(sale)

        loaded = repo.get_by_id(sale.id)

        assert loaded is not None
        assert loaded is not sale
        assert loaded.id == sale.id
        assert loaded.sale_number == "S-0001"
        assert loaded.status == SaleStatus.CANCELLED
        assert loaded.created_at == sale.created_at
        assert loaded.sale_date == sale.sale_date
        assert loaded.updated_at == sale.updated_at
        assert loaded.customer == CUSTOMER
        assert loaded.branch == BRANCH
        assert [i.id for i in loaded.items] == [i.id for i in sale.items]
        assert loaded.items[1].discount_percentage == Decimal("20")
        assert loaded.total_amount == sale.total_amount
        assert len(loaded.events) == 0

    def test_get_by_sale_number(self, repo):
        sale = _sale("S-42")
        repo.add(sale)
        assert repo.get_by_sale_number("S-42").id == sale.id
        assert repo.get_by_sale_number("S-43") is None

    def test_missing_sale(self, repo):
        assert repo.get_by_id(uuid4()) is None

    def test_update(self, repo):
        sale = _sale()
        repo.add(sale)
        sale.update(Customer("C-2", "Bob", "bob@example.com", "555-0202"), BRANCH)
        repo.update(sale)
        loaded = repo.get_by_id(sale.id)
        assert loaded.customer.name == "Bob"
        assert loaded.updated_at is not None

    def test_update_unknown_sale_rejected(self, repo):
        with pytest.raises(EntityNotFoundError):
            repo.update(_sale())

    def test_delete(self, repo):
        sale = _sale()
        repo.add(sale)
        assert repo.delete(sale.id) is True
        assert repo.get_by_id(sale.id) is None
        assert repo.delete(sale.id) is False

    def test_sale_number_exists(self, repo):
        repo.add(_sale("S-1"))
        assert repo.sale_number_exists("S-1")
        assert not repo.sale_number_exists("S-2")

    def test_list_and_count_with_filters(self, repo):
        for n, price in enumerate(["5.00", "15.00", "25.00"], start=1):
            repo.add(_sale(f"S-{n}", qty=1, price=price))

        filters = SaleFilter(min_amount=Decimal("10"))
        listed = repo.list(filters, SaleOrdering.parse("totalAmount"), page=1, size=10)

        assert [s.sale_number for s in listed] == ["S-2", "S-3"]
        assert repo.count(filters) == 2
        assert repo.count() == 3

    def test_list_pages(self, repo):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for n in range(5):
            sale = _sale(f"S-{n}")
            sale.created_at = base + timedelta(hours=n)
            repo.add(sale)

        first = repo.list(page=1, size=2)
        third = repo.list(page=3, size=2)

        # default ordering: newest created first
        assert [s.sale_number for s in first] == ["S-4", "S-3"]
        assert [s.sale_number for s in third] == ["S-0"]

    def test_file_is_readable_json(self, repo, tmp_path):
        repo.add(_sale(qty=5, price="10.00"))
        raw = json.loads((tmp_path / "data" / "sales.json").read_text(encoding="utf-8"))
        assert raw[0]["status"] == "Active"
        assert Decimal(raw[0]["total_amount"]) == Decimal("45")
        assert Decimal(raw[0]["items"][0]["discount_percentage"]) == Decimal("10")
