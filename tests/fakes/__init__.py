"""Shared test doubles: the in-memory file store and a payment factory."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from payrail.models.payment import Payment
from payrail.persistence.memory_backend import MemoryFileStore


def make_payment(**overrides) -> Payment:
    fields = {
        "id": "PAY-1",
        "employee_id": "E1",
        "employee_name": "Jane Doe",
        "amount": Decimal("1500.50"),
        "currency": "USD",
        "account_number": "12345",
        "routing_number": "021000021",
        "bank_name": "Chase",
        "reference": "PAYROLL-JAN",
        "effective_date": date(2024, 1, 31),
    }
    fields.update(overrides)
    return Payment(**fields)


__all__ = ["MemoryFileStore", "make_payment"]
