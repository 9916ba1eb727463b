"""Output models: bank file formats and generated file results."""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel


class BankFileFormat(StrEnum):
    ACH = "ACH"
    SEPA = "SEPA"
    WIRE = "WIRE"
    CSV = "CSV"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES[self]


_EXTENSIONS = {
    BankFileFormat.ACH: "txt",
    BankFileFormat.SEPA: "xml",
    BankFileFormat.WIRE: "txt",
    BankFileFormat.CSV: "csv",
}

_CONTENT_TYPES = {
    BankFileFormat.ACH: "text/plain",
    BankFileFormat.SEPA: "application/xml",
    BankFileFormat.WIRE: "text/plain",
    BankFileFormat.CSV: "text/csv",
}


class BankFileResult(BaseModel):
    """A generated bank file plus the audit totals for its batch."""

    model_config = {"frozen": True}

    content: str
    filename: str
    format: BankFileFormat
    record_count: int = 0
    total_amount: Decimal = Decimal("0")

    @property
    def content_type(self) -> str:
        return self.format.content_type
