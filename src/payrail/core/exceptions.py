"""Payrail exception hierarchy."""

from __future__ import annotations

from typing import Any


class PayrailError(Exception):
    """Base exception for all Payrail errors."""


class UnsupportedFormatError(PayrailError):
    """Requested bank file format is not one of the supported rails."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Unsupported bank file format: {value!r}")


class EncodingError(PayrailError):
    """A payment record cannot be encoded for the chosen rail.

    ``index`` is the position of the offending payment in the batch, or None
    when the problem is in the batch metadata rather than a single record.
    """

    def __init__(self, index: int | None, message: str) -> None:
        self.index = index
        where = "Metadata" if index is None else f"Payment {index}"
        super().__init__(f"{where}: {message}")


class DecryptionError(PayrailError):
    """Ciphertext is malformed, tampered with, or was sealed under another key."""


class ConfigurationError(PayrailError):
    """Configuration is unsafe for the current environment."""


class FileStoreError(PayrailError):
    """File store read or write failed."""
