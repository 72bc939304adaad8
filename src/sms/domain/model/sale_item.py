"""SaleItem entity — one product line within a sale.

The item owns the quantity-discount rule:

    ==========  ========
    Quantity    Discount
    ==========  ========
    1 - 3       0%
    4 - 9       10%
    10 - 20     20%
    > 20        rejected
    ==========  ========

``discount_percentage`` and ``total_amount`` are derived values.  They are
recomputed on every quantity change (discount first, then total) and the
total alone is recomputed on a price change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from sms.domain.exceptions import BusinessRuleViolation, ValidationError
from sms.domain.model.identity import new_id
from sms.domain.model.value_objects import Money, Product

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_IDENTICAL_ITEMS = 20
DISCOUNT_TIERS: tuple[tuple[int, Decimal], ...] = (
    (10, Decimal("20")),
    (4, Decimal("10")),
)
NO_DISCOUNT = Decimal("0")


def discount_for(quantity: int) -> Decimal:
    """Return the discount percentage earned by *quantity* identical items."""
    for threshold, percentage in DISCOUNT_TIERS:
        if quantity >= threshold:
            return percentage
    return NO_DISCOUNT


def _check_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(
            f"Quantity must be an integer, got {type(quantity).__name__}",
            field="quantity",
        )
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than zero", field="quantity")
    if quantity > MAX_IDENTICAL_ITEMS:
        raise BusinessRuleViolation(
            f"Cannot sell more than {MAX_IDENTICAL_ITEMS} identical items"
        )


def _check_unit_price(unit_price: Money) -> None:
    if not isinstance(unit_price, Money):
        raise ValidationError(
            f"Unit price must be Money, got {type(unit_price).__name__}",
            field="unit_price",
        )
    if unit_price.is_zero:
        raise ValidationError("Unit price must be greater than zero", field="unit_price")


@dataclass(eq=False)
class SaleItem:
    """A product line on a sale.

    Use ``SaleItem.create()`` for new items and ``SaleItem.restore()`` when
    loading a persisted one.  Both validate bounds and derive the discount
    and total; they differ only in who picks the ``id``.
    """

    id: UUID
    product: Product
    quantity: int
    unit_price: Money
    discount_percentage: Decimal = field(default=NO_DISCOUNT)
    total_amount: Money = field(default_factory=Money.zero)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(product: Product, quantity: int, unit_price: Money) -> SaleItem:
        """Create a new item, enforcing quantity and price bounds."""
        return SaleItem.restore(new_id(), product, quantity, unit_price)

    @staticmethod
    def restore(
        item_id: UUID, product: Product, quantity: int, unit_price: Money
    ) -> SaleItem:
        """Rebuild an item with a known id (e.g. from storage)."""
        _check_quantity(quantity)
        _check_unit_price(unit_price)
        item = SaleItem(
            id=item_id, product=product, quantity=quantity, unit_price=unit_price
        )
        item._calculate_discount()
        item._calculate_total()
        return item

    # --- Mutations ------------------------------------------------------------

    def update_quantity(self, new_quantity: int) -> None:
        _check_quantity(new_quantity)
        self.quantity = new_quantity
        self._calculate_discount()
        self._calculate_total()

    def update_unit_price(self, new_unit_price: Money) -> None:
        """Change the price; the discount depends on quantity only."""
        _check_unit_price(new_unit_price)
        self.unit_price = new_unit_price
        self._calculate_total()

    # --- Derived values -------------------------------------------------------

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity

    @property
    def discount_amount(self) -> Money:
        return self.subtotal * (self.discount_percentage / Decimal("100"))

    def _calculate_discount(self) -> None:
        self.discount_percentage = discount_for(self.quantity)

    def _calculate_total(self) -> None:
        self.total_amount = self.subtotal - self.discount_amount

    def __repr__(self) -> str:
        return (
            f"SaleItem(id={self.id}, product={self.product.name!r}, "
            f"quantity={self.quantity}, unit_price={self.unit_price}, "
            f"discount={self.discount_percentage}%, total={self.total_amount})"
        )
