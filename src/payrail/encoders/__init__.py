"""Format encoders, one per banking rail, behind IBankFileEncoder."""

from __future__ import annotations

from payrail.core.config import AppSettings
from payrail.core.protocols import IBankFileEncoder
from payrail.encoders.csv_export import CSVEncoder
from payrail.encoders.nacha import ACHEncoder
from payrail.encoders.sepa import SEPAEncoder
from payrail.encoders.wire import WireEncoder
from payrail.models.outputs import BankFileFormat


def create_encoder(fmt: BankFileFormat, settings: AppSettings | None = None) -> IBankFileEncoder:
    """Build the encoder for ``fmt`` from application settings."""
    if settings is None:
        settings = AppSettings()

    if fmt is BankFileFormat.ACH:
        return ACHEncoder(block_padding=settings.ach.block_padding)
    if fmt is BankFileFormat.SEPA:
        return SEPAEncoder(settings.sepa)
    if fmt is BankFileFormat.WIRE:
        return WireEncoder()
    return CSVEncoder()


__all__ = ["ACHEncoder", "CSVEncoder", "SEPAEncoder", "WireEncoder", "create_encoder"]
