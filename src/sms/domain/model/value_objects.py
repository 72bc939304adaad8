"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation

from sms.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}",
                field="amount",
            )
        if not self.amount.is_finite():
            raise ValidationError(
                f"Money amount must be a finite number, got {self.amount}",
                field="amount",
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}",
                field="amount",
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        # bool is an int subclass but never a meaningful factor
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(
                f"Invalid money amount: {amount!r}", field="amount"
            ) from exc

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0.00"), currency)


def _require_text(instance: object) -> None:
    """Reject any dataclass field that is missing, not a string, or blank."""
    for f in fields(instance):  # type: ignore[arg-type]
        value = getattr(instance, f.name)
        if not isinstance(value, str) or not value.strip():
            label = f.name.replace("_", " ").capitalize()
            raise ValidationError(f"{label} is required", field=f.name)


@dataclass(frozen=True)
class Product:
    """Product reference taken from the catalog domain at sale time."""

    external_id: str
    name: str
    description: str
    category: str
    brand: str

    def __post_init__(self) -> None:
        _require_text(self)

    def __str__(self) -> str:
        return f"{self.name} ({self.brand})"


@dataclass(frozen=True)
class Customer:
    """Customer reference taken from the customer domain."""

    external_id: str
    name: str
    email: str
    phone: str

    def __post_init__(self) -> None:
        _require_text(self)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass(frozen=True)
class Branch:
    """Branch (store) where the sale was made."""

    external_id: str
    name: str
    address: str
    city: str
    state: str

    def __post_init__(self) -> None:
        _require_text(self)

    def __str__(self) -> str:
        return f"{self.name} - {self.city}, {self.state}"
