"""Shared fixtures: a fixed clock, a sample batch, fast cipher settings."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import SecretStr

from payrail.core.config import AppSettings, CipherConfig
from payrail.models.payment import BankFileMetadata, Payment
from tests.fakes import make_payment

FIXED_NOW = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def payments() -> list[Payment]:
    return [
        make_payment(),
        make_payment(
            id="PAY-2", employee_id="E2", employee_name="John Smith",
            amount=Decimal("2250.00"), account_number="987654321",
            routing_number="011000015", bank_name="Bank of Boston",
            iban="DE44500105175407324931", swift_code="INGDDEFFXXX",
        ),
        make_payment(
            id="PAY-3", employee_id="E3", employee_name="Ana Lopez",
            amount=Decimal("999.99"), account_number="55501234",
            routing_number="121000248", bank_name="Wells Fargo",
        ),
    ]


@pytest.fixture
def metadata() -> BankFileMetadata:
    return BankFileMetadata(
        company_name="ACME PAYROLL",
        company_id="1234567890",
        originating_dfi="02100002",
    )


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        cipher=CipherConfig(secret=SecretStr("unit-test-secret"), iterations=1_000),
    )
