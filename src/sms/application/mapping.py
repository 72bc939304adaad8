"""Conversions between DTOs and domain objects.

Inbound: specs -> value objects / items (domain validation applies).
Outbound: Sale -> display DTOs.
"""

from __future__ import annotations

from datetime import datetime

from sms.application.dto import (
    BranchSpec,
    CustomerSpec,
    SaleDTO,
    SaleItemDTO,
    SaleItemSpec,
    SaleSummaryDTO,
)
from sms.domain.model.sale import Sale
from sms.domain.model.sale_item import SaleItem
from sms.domain.model.value_objects import Branch, Customer, Money, Product

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


# --- Inbound -----------------------------------------------------------------


def to_customer(spec: CustomerSpec) -> Customer:
    return Customer(
        external_id=spec.external_id,
        name=spec.name,
        email=spec.email,
        phone=spec.phone,
    )


def to_branch(spec: BranchSpec) -> Branch:
    return Branch(
        external_id=spec.external_id,
        name=spec.name,
        address=spec.address,
        city=spec.city,
        state=spec.state,
    )


def to_sale_item(spec: SaleItemSpec) -> SaleItem:
    product = Product(
        external_id=spec.product.external_id,
        name=spec.product.name,
        description=spec.product.description,
        category=spec.product.category,
        brand=spec.product.brand,
    )
    return SaleItem.create(product, spec.quantity, Money.of(spec.unit_price))


# --- Outbound ----------------------------------------------------------------


def _format_time(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime(_TIMESTAMP_FORMAT)


def _format_percentage(item: SaleItem) -> str:
    return f"{item.discount_percentage.normalize():f}%"


def to_sale_dto(sale: Sale) -> SaleDTO:
    return SaleDTO(
        id=str(sale.id),
        sale_number=sale.sale_number,
        sale_date=_format_time(sale.sale_date),  # type: ignore[arg-type]
        customer_name=sale.customer.name,
        customer_email=sale.customer.email,
        branch_name=sale.branch.name,
        branch_location=f"{sale.branch.city}, {sale.branch.state}",
        status=sale.status.value,
        items=[
            SaleItemDTO(
                id=str(item.id),
                product_name=item.product.name,
                product_brand=item.product.brand,
                quantity=item.quantity,
                unit_price=str(item.unit_price),
                discount_percentage=_format_percentage(item),
                total_amount=str(item.total_amount),
            )
            for item in sale.items
        ],
        total_amount=str(sale.total_amount),
        created_at=_format_time(sale.created_at),  # type: ignore[arg-type]
        updated_at=_format_time(sale.updated_at),
    )


def to_summary_dto(sale: Sale) -> SaleSummaryDTO:
    return SaleSummaryDTO(
        id=str(sale.id),
        sale_number=sale.sale_number,
        sale_date=_format_time(sale.sale_date),  # type: ignore[arg-type]
        customer_name=sale.customer.name,
        branch_name=sale.branch.name,
        status=sale.status.value,
        total_amount=str(sale.total_amount),
    )
