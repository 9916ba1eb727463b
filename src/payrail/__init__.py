"""Payrail: payroll bank-file generation (ACH, SEPA, Wire, CSV) and bank data cipher."""

from __future__ import annotations

from payrail.core.exceptions import (
    DecryptionError,
    EncodingError,
    PayrailError,
    UnsupportedFormatError,
)
from payrail.models.outputs import BankFileFormat, BankFileResult
from payrail.models.payment import BankFileMetadata, Payment
from payrail.services.bank_files import generate_bank_file
from payrail.services.cipher import decrypt_bank_data, encrypt_bank_data

__version__ = "0.1.0"

__all__ = [
    "BankFileFormat",
    "BankFileMetadata",
    "BankFileResult",
    "DecryptionError",
    "EncodingError",
    "Payment",
    "PayrailError",
    "UnsupportedFormatError",
    "decrypt_bank_data",
    "encrypt_bank_data",
    "generate_bank_file",
]
