"""JSON-file-backed implementation of SaleRepository.

The whole file is read and rewritten on every call: a single-process store.
Sales are reconstituted through the Sale constructor so status and
timestamps come back exactly as they were saved.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from uuid import UUID

from sms.domain.exceptions import EntityNotFoundError
from sms.domain.model.sale import Sale, SaleStatus
from sms.domain.model.sale_item import SaleItem
from sms.domain.model.value_objects import Branch, Customer, Money, Product
from sms.domain.repository.sale_repository import (
    DEFAULT_PAGE_SIZE,
    SaleFilter,
    SaleOrdering,
    SaleRepository,
    check_page,
)


class JsonSaleRepository(SaleRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- SaleRepository interface ---------------------------------------------

    def get_by_id(self, sale_id: UUID) -> Sale | None:
        for raw in self._load_raw():
            if raw["id"] == str(sale_id):
                return self._to_domain(raw)
        return None

    def get_by_sale_number(self, sale_number: str) -> Sale | None:
        for raw in self._load_raw():
            if raw["sale_number"] == sale_number:
                return self._to_domain(raw)
        return None

    def list(
        self,
        filters: SaleFilter | None = None,
        ordering: SaleOrdering | None = None,
        page: int = 1,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> list[Sale]:
        check_page(page, size)
        matching = self._matching(filters)
        ordered = (ordering or SaleOrdering()).apply(matching)
        start = (page - 1) * size
        return ordered[start:start + size]

    def count(self, filters: SaleFilter | None = None) -> int:
        return len(self._matching(filters))

    def add(self, sale: Sale) -> None:
        sales = self._load_raw()
        sales.append(self._to_raw(sale))
        self._persist_raw(sales)

    def update(self, sale: Sale) -> None:
        sales = self._load_raw()
        for i, raw in enumerate(sales):
            if raw["id"] == str(sale.id):
                sales[i] = self._to_raw(sale)
                self._persist_raw(sales)
                return
        raise EntityNotFoundError(f"Sale with ID '{sale.id}' not found")

    def delete(self, sale_id: UUID) -> bool:
        sales = self._load_raw()
        remaining = [raw for raw in sales if raw["id"] != str(sale_id)]
        if len(remaining) == len(sales):
            return False
        self._persist_raw(remaining)
        return True

    def sale_number_exists(self, sale_number: str) -> bool:
        return any(raw["sale_number"] == sale_number for raw in self._load_raw())

    # --- Querying -------------------------------------------------------------

    def _matching(self, filters: SaleFilter | None) -> list[Sale]:
        criteria = filters or SaleFilter()
        sales = [self._to_domain(raw) for raw in self._load_raw()]
        return [sale for sale in sales if criteria.matches(sale)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sale: Sale) -> dict:
        return {
            "id": str(sale.id),
            "sale_number": sale.sale_number,
            "sale_date": sale.sale_date.isoformat(),
            "customer": {
                "external_id": sale.customer.external_id,
                "name": sale.customer.name,
                "email": sale.customer.email,
                "phone": sale.customer.phone,
            },
            "branch": {
                "external_id": sale.branch.external_id,
                "name": sale.branch.name,
                "address": sale.branch.address,
                "city": sale.branch.city,
                "state": sale.branch.state,
            },
            "status": sale.status.value,
            "total_amount": str(sale.total_amount.amount),
            "created_at": sale.created_at.isoformat(),
            "updated_at": sale.updated_at.isoformat() if sale.updated_at else None,
            "items": [
                {
                    "id": str(item.id),
                    "product": {
                        "external_id": item.product.external_id,
                        "name": item.product.name,
                        "description": item.product.description,
                        "category": item.product.category,
                        "brand": item.product.brand,
                    },
                    "quantity": item.quantity,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "discount_percentage": str(item.discount_percentage),
                    "total_amount": str(item.total_amount.amount),
                }
                for item in sale.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Sale:
        # Discount and totals are re-derived from quantity and price; the
        # stored copies are for readers of the file only.
        items = [
            SaleItem.restore(
                UUID(i["id"]),
                Product(**i["product"]),
                i["quantity"],
                Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        updated_at = raw.get("updated_at")
        return Sale(
            id=UUID(raw["id"]),
            sale_number=raw["sale_number"],
            sale_date=datetime.fromisoformat(raw["sale_date"]),
            customer=Customer(**raw["customer"]),
            branch=Branch(**raw["branch"]),
            items=items,
            status=SaleStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, sales: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(sales, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
