"""Application service: List Sales use case (query).

Translates the raw listing criteria into domain filter/ordering objects
and wraps the page with pagination info.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from sms.application.dto import SalePageDTO, SalesQuery
from sms.application.mapping import to_summary_dto
from sms.domain.exceptions import ValidationError
from sms.domain.model.sale import SaleStatus
from sms.domain.repository.sale_repository import (
    SaleFilter,
    SaleOrdering,
    SaleRepository,
    check_page,
)


def _as_utc(value: datetime | None) -> datetime | None:
    # Naive bounds are taken to be UTC, like every stored timestamp.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _as_decimal(value: str | None, name: str) -> Decimal | None:
    if value is None:
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid amount for {name}: {value!r}", field=name) from exc
    if not amount.is_finite():
        raise ValidationError(f"Amount for {name} must be finite, got {value!r}", field=name)
    return amount


def _as_status(value: str | None) -> SaleStatus | None:
    if not value:
        return None
    for status in SaleStatus:
        if status.value.lower() == value.lower() or status.name.lower() == value.lower():
            return status
    raise ValidationError(f"Unknown sale status '{value}'", field="status")


def build_filter(query: SalesQuery) -> SaleFilter:
    return SaleFilter(
        customer_id=query.customer_id or None,
        branch_id=query.branch_id or None,
        status=_as_status(query.status),
        min_date=_as_utc(query.min_date),
        max_date=_as_utc(query.max_date),
        min_amount=_as_decimal(query.min_amount, "min_amount"),
        max_amount=_as_decimal(query.max_amount, "max_amount"),
    )


class ListSalesHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self, query: SalesQuery) -> SalePageDTO:
        check_page(query.page, query.size)

        filters = build_filter(query)
        ordering = SaleOrdering.parse(query.order_by)

        sales = self._sale_repo.list(filters, ordering, query.page, query.size)
        total_count = self._sale_repo.count(filters)

        return SalePageDTO(
            sales=[to_summary_dto(sale) for sale in sales],
            total_count=total_count,
            current_page=query.page,
            page_size=query.size,
            total_pages=math.ceil(total_count / query.size),
        )
