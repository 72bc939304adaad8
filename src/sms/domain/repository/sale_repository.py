"""Abstract repository for the Sale aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.

Listing criteria (``SaleFilter``, ``SaleOrdering``) are plain domain
objects that any implementation can evaluate in memory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sms.domain.exceptions import ValidationError
from sms.domain.model.identity import identity_key
from sms.domain.model.sale import Sale, SaleStatus

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class SaleFilter:
    """Optional listing filters; ``None`` means "don't filter on this"."""

    customer_id: str | None = None
    branch_id: str | None = None
    status: SaleStatus | None = None
    min_date: datetime | None = None
    max_date: datetime | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None

    def matches(self, sale: Sale) -> bool:
        if self.customer_id and sale.customer.external_id != self.customer_id:
            return False
        if self.branch_id and sale.branch.external_id != self.branch_id:
            return False
        if self.status is not None and sale.status != self.status:
            return False
        if self.min_date is not None and sale.sale_date < self.min_date:
            return False
        if self.max_date is not None and sale.sale_date > self.max_date:
            return False
        total = sale.total_amount.amount
        if self.min_amount is not None and total < self.min_amount:
            return False
        if self.max_amount is not None and total > self.max_amount:
            return False
        return True


# Public ordering names -> Sale attribute readers
_ORDER_KEYS = {
    "saledate": lambda s: s.sale_date,
    "totalamount": lambda s: s.total_amount.amount,
    "createdat": lambda s: s.created_at,
}


@dataclass(frozen=True)
class SaleOrdering:
    """Sequence of ``(key, descending)`` pairs, most significant first."""

    keys: tuple[tuple[str, bool], ...] = (("createdat", True),)

    @staticmethod
    def parse(order_by: str | None) -> SaleOrdering:
        """Parse ``"saleDate desc, totalAmount"`` style expressions.

        Unknown keys are skipped.  An empty or fully-unknown expression
        falls back to newest-created first.
        """
        if not order_by or not order_by.strip():
            return SaleOrdering()

        keys: list[tuple[str, bool]] = []
        for part in order_by.split(","):
            tokens = part.split()
            if not tokens:
                continue
            name = tokens[0].lower()
            if name not in _ORDER_KEYS:
                continue
            descending = len(tokens) > 1 and tokens[1].lower() == "desc"
            keys.append((name, descending))

        return SaleOrdering(tuple(keys)) if keys else SaleOrdering()

    def apply(self, sales: list[Sale]) -> list[Sale]:
        # Stable sorts applied least-significant first; id breaks ties.
        result = sorted(sales, key=identity_key)
        for name, descending in reversed(self.keys):
            result.sort(key=_ORDER_KEYS[name], reverse=descending)
        return result


def check_page(page: int, size: int) -> None:
    if page < 1:
        raise ValidationError("Page must be 1 or greater", field="page")
    if size < 1:
        raise ValidationError("Page size must be 1 or greater", field="size")


class SaleRepository(ABC):

    @abstractmethod
    def get_by_id(self, sale_id: UUID) -> Sale | None:
        """Return a sale by its ID, or None if not found."""

    @abstractmethod
    def get_by_sale_number(self, sale_number: str) -> Sale | None:
        """Return a sale by its sale number, or None if not found."""

    @abstractmethod
    def list(
        self,
        filters: SaleFilter | None = None,
        ordering: SaleOrdering | None = None,
        page: int = 1,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> list[Sale]:
        """Return one page of sales matching *filters*, in *ordering*."""

    @abstractmethod
    def count(self, filters: SaleFilter | None = None) -> int:
        """Return how many sales match *filters*."""

    @abstractmethod
    def add(self, sale: Sale) -> None:
        """Persist a new sale."""

    @abstractmethod
    def update(self, sale: Sale) -> None:
        """Persist changes to an existing sale.

        Raises EntityNotFoundError if the sale was never added.
        """

    @abstractmethod
    def delete(self, sale_id: UUID) -> bool:
        """Hard-delete a sale.  Returns False if it did not exist."""

    @abstractmethod
    def sale_number_exists(self, sale_number: str) -> bool:
        """True if any stored sale already uses *sale_number*."""
