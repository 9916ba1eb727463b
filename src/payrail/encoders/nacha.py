"""ACH (NACHA) fixed-width encoder.

Each record type is a model whose ``LAYOUT`` lists ``(field, width, kind)``
in column order. ``render_record`` is the only place padding happens:
numeric fields are zero-filled on the left and must fit their width,
alphanumeric fields are space-filled on the right and truncated.

Only credit entries are produced (payroll disbursement). Total debits are
always zero and the service class is 220, credits only.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel

from payrail.core.exceptions import EncodingError
from payrail.encoders.base import first_effective_date, require, to_cents
from payrail.models.payment import BankFileMetadata, Payment

RECORD_SIZE = 94
BLOCKING_FACTOR = 10
FILLER_RECORD = "9" * RECORD_SIZE
ENTRY_HASH_MODULUS = 10**10

SERVICE_CLASS_CREDITS_ONLY = "220"
TRANSACTION_CODE_CHECKING_CREDIT = "22"
SEC_CODE_PPD = "PPD"


class FieldKind(StrEnum):
    NUMERIC = "N"
    ALPHA = "A"


N = FieldKind.NUMERIC
A = FieldKind.ALPHA


class NachaRecord(BaseModel):
    """Base for the five NACHA record types."""

    model_config = {"frozen": True}

    LAYOUT: ClassVar[tuple[tuple[str, int, FieldKind], ...]] = ()

    def render(self) -> str:
        return render_record(self)


def render_record(record: NachaRecord) -> str:
    """Render a record to its 94-character line.

    Raises:
        ValueError: a numeric field is not all digits or overflows its width,
            or an alphanumeric field holds a control or non-ASCII character.
    """
    parts: list[str] = []
    for name, width, kind in record.LAYOUT:
        text = str(getattr(record, name))
        if kind is FieldKind.NUMERIC:
            if not (text.isascii() and text.isdigit()):
                raise ValueError(f"{name} must be numeric, got {text!r}")
            if len(text) > width:
                raise ValueError(f"{name} {text!r} exceeds {width} digits")
            parts.append(text.rjust(width, "0"))
        else:
            if not text.isascii() or not text.isprintable():
                raise ValueError(f"{name} must be printable ASCII")
            parts.append(text[:width].ljust(width))
    line = "".join(parts)
    if len(line) != RECORD_SIZE:
        raise ValueError(f"{type(record).__name__} layout is {len(line)} characters, not {RECORD_SIZE}")
    return line


class FileHeader(NachaRecord):
    LAYOUT = (
        ("record_type_code", 1, N),
        ("priority_code", 2, N),
        ("immediate_destination", 10, A),
        ("immediate_origin", 10, A),
        ("file_creation_date", 6, N),
        ("file_creation_time", 4, N),
        ("file_id_modifier", 1, A),
        ("record_size", 3, N),
        ("blocking_factor", 2, N),
        ("format_code", 1, N),
        ("immediate_destination_name", 23, A),
        ("immediate_origin_name", 23, A),
        ("reference_code", 8, A),
    )

    record_type_code: str = "1"
    priority_code: str = "01"
    immediate_destination: str = ""
    immediate_origin: str = ""
    file_creation_date: str
    file_creation_time: str
    file_id_modifier: str = "A"
    record_size: str = "094"
    blocking_factor: str = "10"
    format_code: str = "1"
    immediate_destination_name: str = ""
    immediate_origin_name: str = ""
    reference_code: str = ""


class BatchHeader(NachaRecord):
    LAYOUT = (
        ("record_type_code", 1, N),
        ("service_class_code", 3, N),
        ("company_name", 16, A),
        ("company_discretionary_data", 20, A),
        ("company_identification", 10, A),
        ("standard_entry_class_code", 3, A),
        ("company_entry_description", 10, A),
        ("company_descriptive_date", 6, A),
        ("effective_entry_date", 6, N),
        ("settlement_date", 3, A),
        ("originator_status_code", 1, A),
        ("originating_dfi", 8, N),
        ("batch_number", 7, N),
    )

    record_type_code: str = "5"
    service_class_code: str = SERVICE_CLASS_CREDITS_ONLY
    company_name: str
    company_discretionary_data: str = ""
    company_identification: str
    standard_entry_class_code: str = SEC_CODE_PPD
    company_entry_description: str
    company_descriptive_date: str = ""
    effective_entry_date: str
    settlement_date: str = ""  # filled in by the ACH operator
    originator_status_code: str = "1"
    originating_dfi: str
    batch_number: int = 1


class EntryDetail(NachaRecord):
    LAYOUT = (
        ("record_type_code", 1, N),
        ("transaction_code", 2, N),
        ("receiving_dfi", 8, N),
        ("check_digit", 1, N),
        ("dfi_account_number", 17, A),
        ("amount", 10, N),
        ("individual_id", 15, A),
        ("individual_name", 22, A),
        ("discretionary_data", 2, A),
        ("addenda_record_indicator", 1, N),
        ("trace_number", 15, N),
    )

    record_type_code: str = "6"
    transaction_code: str = TRANSACTION_CODE_CHECKING_CREDIT
    receiving_dfi: str
    check_digit: str
    dfi_account_number: str
    amount: int
    individual_id: str = ""
    individual_name: str = ""
    discretionary_data: str = ""
    addenda_record_indicator: str = "0"
    trace_number: str


class BatchControl(NachaRecord):
    LAYOUT = (
        ("record_type_code", 1, N),
        ("service_class_code", 3, N),
        ("entry_addenda_count", 6, N),
        ("entry_hash", 10, N),
        ("total_debits", 12, N),
        ("total_credits", 12, N),
        ("company_identification", 10, A),
        ("message_authentication_code", 19, A),
        ("reserved", 6, A),
        ("originating_dfi", 8, N),
        ("batch_number", 7, N),
    )

    record_type_code: str = "8"
    service_class_code: str = SERVICE_CLASS_CREDITS_ONLY
    entry_addenda_count: int
    entry_hash: int
    total_debits: int = 0
    total_credits: int
    company_identification: str
    message_authentication_code: str = ""
    reserved: str = ""
    originating_dfi: str
    batch_number: int = 1


class FileControl(NachaRecord):
    LAYOUT = (
        ("record_type_code", 1, N),
        ("batch_count", 6, N),
        ("block_count", 6, N),
        ("entry_addenda_count", 8, N),
        ("entry_hash", 10, N),
        ("total_debits", 12, N),
        ("total_credits", 12, N),
        ("reserved", 39, A),
    )

    record_type_code: str = "9"
    batch_count: int = 1
    block_count: int
    entry_addenda_count: int
    entry_hash: int
    total_debits: int = 0
    total_credits: int
    reserved: str = ""


def entry_hash(receiving_dfis: Sequence[str]) -> int:
    """Sum of the 8-digit RDFI identifications, high-order digits dropped."""
    return sum(int(dfi) for dfi in receiving_dfis) % ENTRY_HASH_MODULUS


def _routing_field(value: str, label: str) -> str:
    """Leading blank plus nine digits, or all blanks when not supplied."""
    if not value:
        return ""
    if not value.isdigit() or len(value) > 9:
        raise EncodingError(None, f"{label} must be up to 9 digits")
    return " " + value.rjust(9, "0")


def _odfi(value: str) -> str:
    # A full 9-digit routing number carries a check digit the ODFI field omits.
    if not value.isdigit():
        raise EncodingError(None, "originatingDFI must be numeric")
    if len(value) == 9:
        return value[:8]
    if len(value) > 8:
        raise EncodingError(None, "originatingDFI must be 8 digits")
    return value.rjust(8, "0")


class ACHEncoder:
    """Builds a single-batch PPD credit file."""

    def __init__(self, *, block_padding: bool = False) -> None:
        self._block_padding = block_padding

    def encode(
        self,
        payments: Sequence[Payment],
        metadata: BankFileMetadata,
        created_at: datetime,
    ) -> str:
        creation_date = created_at.strftime("%y%m%d")
        effective = first_effective_date(payments)
        effective_date = effective.strftime("%y%m%d") if effective else creation_date
        odfi = _odfi(metadata.originating_dfi)
        company_id = metadata.company_id.rjust(10, "0")

        entries = [
            self._entry(index, payment, odfi) for index, payment in enumerate(payments)
        ]
        hash_total = entry_hash([e.receiving_dfi for e in entries])
        credits = sum(e.amount for e in entries)

        try:
            lines = [
                FileHeader(
                    immediate_destination=_routing_field(
                        metadata.immediate_destination, "immediateDestination"
                    ),
                    immediate_origin=_routing_field(metadata.immediate_origin, "immediateOrigin"),
                    file_creation_date=creation_date,
                    file_creation_time=created_at.strftime("%H%M"),
                    immediate_destination_name=metadata.destination_name,
                    immediate_origin_name=metadata.origin_name,
                    reference_code=metadata.reference_code,
                ).render(),
                BatchHeader(
                    company_name=metadata.company_name,
                    company_identification=company_id,
                    company_entry_description=metadata.batch_description,
                    company_descriptive_date=creation_date,
                    effective_entry_date=effective_date,
                    originating_dfi=odfi,
                ).render(),
            ]
        except ValueError as exc:
            raise EncodingError(None, str(exc)) from exc

        for index, entry in enumerate(entries):
            try:
                lines.append(entry.render())
            except ValueError as exc:
                raise EncodingError(index, str(exc)) from exc

        physical = len(lines) + 2  # plus batch control and file control
        block_count = math.ceil(physical / BLOCKING_FACTOR)
        try:
            lines.append(
                BatchControl(
                    entry_addenda_count=len(entries),
                    entry_hash=hash_total,
                    total_credits=credits,
                    company_identification=company_id,
                    originating_dfi=odfi,
                ).render()
            )
            lines.append(
                FileControl(
                    block_count=block_count,
                    entry_addenda_count=len(entries),
                    entry_hash=hash_total,
                    total_credits=credits,
                ).render()
            )
        except ValueError as exc:
            raise EncodingError(None, str(exc)) from exc

        if self._block_padding:
            lines.extend([FILLER_RECORD] * (block_count * BLOCKING_FACTOR - len(lines)))
        return "\n".join(lines)

    @staticmethod
    def _entry(index: int, payment: Payment, odfi: str) -> EntryDetail:
        require(payment, index, "routing_number", "account_number", rail="ACH")
        routing = payment.routing_number
        if not routing.isdigit() or len(routing) > 9:
            raise EncodingError(index, "routing_number must be up to 9 digits")
        routing = routing.rjust(9, "0")
        if len(payment.account_number) > 17:
            raise EncodingError(index, "account_number exceeds 17 characters")
        cents = to_cents(payment.amount)
        if cents >= 10**10:
            raise EncodingError(index, "amount exceeds the 10-digit ACH amount field")
        return EntryDetail(
            receiving_dfi=routing[:8],
            check_digit=routing[8],
            dfi_account_number=payment.account_number,
            amount=cents,
            individual_id=payment.employee_id,
            individual_name=payment.employee_name,
            trace_number=f"{odfi}{index + 1:07d}",
        )
