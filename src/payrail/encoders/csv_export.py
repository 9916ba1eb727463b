"""CSV payment listing: one quoted row per payment."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from datetime import datetime

from payrail.encoders.base import format_amount
from payrail.models.payment import BankFileMetadata, Payment

HEADERS = [
    "Employee ID",
    "Employee Name",
    "Amount",
    "Currency",
    "Account Number",
    "Routing Number",
    "Bank Name",
    "IBAN",
    "SWIFT Code",
    "Reference",
    "Effective Date",
]


def _row(payment: Payment) -> list[str]:
    return [
        payment.employee_id,
        payment.employee_name,
        format_amount(payment.amount),
        payment.currency,
        payment.account_number,
        payment.routing_number,
        payment.bank_name,
        payment.iban or "",
        payment.swift_code or "",
        payment.reference,
        payment.effective_date.isoformat() if payment.effective_date else "",
    ]


class CSVEncoder:
    """Every cell quoted; embedded quotes doubled by the csv module."""

    def encode(
        self,
        payments: Sequence[Payment],
        metadata: BankFileMetadata,
        created_at: datetime,
    ) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(HEADERS)
        writer.writerows(_row(p) for p in payments)
        return buffer.getvalue().removesuffix("\n")
