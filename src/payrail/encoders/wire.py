"""Wire transfer ledger for manual initiation by an operator."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from payrail.encoders.base import batch_total, format_amount, require
from payrail.models.payment import BankFileMetadata, Payment

DEFAULT_CURRENCY = "USD"


class WireEncoder:
    def encode(
        self,
        payments: Sequence[Payment],
        metadata: BankFileMetadata,
        created_at: datetime,
    ) -> str:
        lines = [
            f"WIRE TRANSFER FILE - {created_at.isoformat()}",
            f"COMPANY: {metadata.company_name}",
            f"TOTAL PAYMENTS: {len(payments)}",
            f"TOTAL AMOUNT: {format_amount(batch_total(payments))}",
            "",
        ]
        for index, payment in enumerate(payments):
            require(payment, index, "employee_name", "account_number", rail="WIRE")
            effective = payment.effective_date.isoformat() if payment.effective_date else ""
            lines.extend([
                f"PAYMENT {index + 1}",
                f"  Beneficiary: {payment.employee_name}",
                f"  Account: {payment.account_number}",
                f"  Bank: {payment.bank_name}",
                f"  Routing/SWIFT: {payment.swift_code or payment.routing_number}",
                f"  Amount: {format_amount(payment.amount)} {payment.currency or DEFAULT_CURRENCY}",
                f"  Reference: {payment.reference}",
                f"  Effective Date: {effective}",
                "",
            ])
        return "\n".join(lines)
