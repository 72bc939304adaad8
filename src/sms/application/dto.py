"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Input specs hold raw
strings and numbers; output DTOs hold display-ready values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


# --- Input -------------------------------------------------------------------


@dataclass(frozen=True)
class ProductSpec:
    external_id: str
    name: str
    description: str
    category: str
    brand: str


@dataclass(frozen=True)
class CustomerSpec:
    external_id: str
    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class BranchSpec:
    external_id: str
    name: str
    address: str
    city: str
    state: str


@dataclass(frozen=True)
class SaleItemSpec:
    """Input: one product line (unit price as a decimal string)."""

    product: ProductSpec
    quantity: int
    unit_price: str


@dataclass(frozen=True)
class SaleRequest:
    """Input: everything needed to register a new sale."""

    sale_number: str
    customer: CustomerSpec
    branch: BranchSpec
    items: list[SaleItemSpec] = field(default_factory=list)


@dataclass(frozen=True)
class SalesQuery:
    """Input: listing criteria.  Dates and amounts are optional bounds."""

    page: int = 1
    size: int = 10
    order_by: str | None = None
    customer_id: str | None = None
    branch_id: str | None = None
    status: str | None = None
    min_date: datetime | None = None
    max_date: datetime | None = None
    min_amount: str | None = None
    max_amount: str | None = None


# --- Output ------------------------------------------------------------------


@dataclass(frozen=True)
class SaleItemDTO:
    id: str
    product_name: str
    product_brand: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    discount_percentage: str  # e.g. "10%"
    total_amount: str


@dataclass(frozen=True)
class SaleDTO:
    """Output: a complete sale as displayed to the user."""

    id: str
    sale_number: str
    sale_date: str
    customer_name: str
    customer_email: str
    branch_name: str
    branch_location: str
    status: str
    items: list[SaleItemDTO]
    total_amount: str
    created_at: str
    updated_at: str | None


@dataclass(frozen=True)
class SaleSummaryDTO:
    """Output: one row of a sales listing."""

    id: str
    sale_number: str
    sale_date: str
    customer_name: str
    branch_name: str
    status: str
    total_amount: str


@dataclass(frozen=True)
class SalePageDTO:
    sales: list[SaleSummaryDTO]
    total_count: int
    current_page: int
    page_size: int
    total_pages: int
