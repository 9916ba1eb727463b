"""Amount arithmetic and field checks shared by the format encoders."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from payrail.core.exceptions import EncodingError
from payrail.core.types import Cents
from payrail.models.payment import Payment

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> Cents:
    """Integer minor units, rounding half away from zero."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_amount(amount: Decimal) -> str:
    """Two-decimal string, e.g. Decimal("1500.5") -> "1500.50"."""
    return str(amount.quantize(CENT, rounding=ROUND_HALF_UP))


def batch_total(payments: Iterable[Payment]) -> Decimal:
    return sum((p.amount for p in payments), Decimal("0"))


def require(payment: Payment, index: int, *fields: str, rail: str) -> None:
    """Raise EncodingError for the first blank field the rail cannot do without."""
    for name in fields:
        value = getattr(payment, name)
        if value is None or (isinstance(value, str) and not value):
            raise EncodingError(index, f"{rail} requires {name}")


def first_effective_date(payments: Sequence[Payment]) -> date | None:
    """Effective date of the first payment, or None for an empty/undated batch."""
    return payments[0].effective_date if payments else None
