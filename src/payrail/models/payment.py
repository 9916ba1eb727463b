"""Payment instruction and batch metadata models.

Callers coming from the dashboard send camelCase keys (``employeeName``,
``companyIBAN``); Python callers may use field names. Both validate into the
same immutable models.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Payment(BaseModel):
    """Single payroll disbursement to one employee."""

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }

    # --- Identity ---
    id: str = ""  # SEPA EndToEndId
    employee_id: str = ""
    employee_name: str = ""

    # --- Amount ---
    amount: Decimal = Field(ge=0, decimal_places=2)  # whole cents only
    currency: str = ""

    # --- Domestic routing (ACH / Wire) ---
    account_number: str = ""
    routing_number: str = ""
    bank_name: str = ""

    # --- International routing (SEPA / Wire) ---
    iban: Optional[str] = None
    swift_code: Optional[str] = None

    reference: str = ""
    effective_date: Optional[date] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _float_through_str(cls, value: Any) -> Any:
        # 1500.50 must become Decimal("1500.5"), not its binary expansion
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    @field_validator("effective_date", "iban", "swift_code", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BankFileMetadata(BaseModel):
    """Originator details shared by every record in a bank file."""

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    company_name: str = Field(default="COMPANY", alias="companyName")
    company_id: str = Field(default="0000000000", alias="companyId")
    batch_description: str = Field(default="PAYROLL", alias="batchDescription")
    originating_dfi: str = Field(default="00000000", alias="originatingDFI")
    destination_name: str = Field(default="BANK", alias="destinationName")
    origin_name: str = Field(default="COMPANY", alias="originName")
    immediate_destination: str = Field(default="", alias="immediateDestination")
    immediate_origin: str = Field(default="", alias="immediateOrigin")
    reference_code: str = Field(default="", alias="referenceCode")
    company_iban: Optional[str] = Field(default=None, alias="companyIBAN")
    company_bic: Optional[str] = Field(default=None, alias="companyBIC")

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        # An empty value means "use the default", same as a missing key.
        if isinstance(data, dict):
            return {
                key: value for key, value in data.items()
                if value is not None and not (isinstance(value, str) and not value.strip())
            }
        return data
