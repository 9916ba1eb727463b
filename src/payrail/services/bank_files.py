"""BankFileService: dispatch a payment batch to its rail encoder.

Payment records are validated into immutable models, encoded, and wrapped
with the dated filename and audit totals. Nothing is written anywhere; the
caller decides whether to publish, upload, or stream the result.

Account and routing numbers are never logged.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from payrail.core.config import AppSettings
from payrail.core.exceptions import EncodingError, UnsupportedFormatError
from payrail.core.logging import get_logger
from payrail.core.types import Metadata
from payrail.encoders import create_encoder
from payrail.encoders.base import batch_total
from payrail.models.outputs import BankFileFormat, BankFileResult
from payrail.models.payment import BankFileMetadata, Payment

logger = get_logger(__name__)

PaymentInput = Payment | Mapping[str, Any]
MetadataInput = BankFileMetadata | Metadata | None


def parse_format(value: Any) -> BankFileFormat:
    """Accept a BankFileFormat or a case-insensitive rail name."""
    if isinstance(value, BankFileFormat):
        return value
    if isinstance(value, str):
        try:
            return BankFileFormat(value.strip().upper())
        except ValueError:
            pass
    raise UnsupportedFormatError(value)


def _describe(exc: ValidationError) -> str:
    # loc/msg only: input values may hold account numbers
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'record'}: {err['msg']}"
        for err in exc.errors()
    )


def normalize_payments(payments: Iterable[PaymentInput]) -> list[Payment]:
    """Validate caller records into Payment models, keeping order."""
    batch: list[Payment] = []
    for index, item in enumerate(payments):
        if isinstance(item, Payment):
            batch.append(item)
            continue
        try:
            batch.append(Payment.model_validate(item))
        except ValidationError as exc:
            raise EncodingError(index, f"invalid payment record ({_describe(exc)})") from exc
    return batch


def normalize_metadata(metadata: MetadataInput) -> BankFileMetadata:
    if metadata is None:
        return BankFileMetadata()
    if isinstance(metadata, BankFileMetadata):
        return metadata
    try:
        return BankFileMetadata.model_validate(dict(metadata))
    except ValidationError as exc:
        raise EncodingError(None, f"invalid metadata ({_describe(exc)})") from exc


def build_filename(fmt: BankFileFormat, now: datetime) -> str:
    """``{FORMAT}_{YYYY-MM-DD}.{ext}`` using the UTC calendar date."""
    day = now.astimezone(timezone.utc).date().isoformat()
    return f"{fmt.value}_{day}.{fmt.extension}"


class BankFileService:
    """Generates bank files for the configured rails."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def generate(
        self,
        format: BankFileFormat | str,
        payments: Iterable[PaymentInput],
        metadata: MetadataInput = None,
        *,
        now: datetime | None = None,
    ) -> BankFileResult:
        """Encode ``payments`` for ``format``.

        Raises:
            UnsupportedFormatError: ``format`` is not ACH, SEPA, WIRE or CSV.
            EncodingError: a record or the metadata cannot be encoded for the rail.
        """
        records = list(payments)
        created_at = now or datetime.now(timezone.utc)
        try:
            fmt = parse_format(format)
            batch = normalize_payments(records)
            header = normalize_metadata(metadata)
            content = create_encoder(fmt, self._settings).encode(batch, header, created_at)
        except Exception as exc:
            logger.error(
                "bank_file_generation_failed",
                format=str(format),
                record_count=len(records),
                error_type=type(exc).__name__,
                record_index=getattr(exc, "index", None),
            )
            raise

        result = BankFileResult(
            content=content,
            filename=build_filename(fmt, created_at),
            format=fmt,
            record_count=len(batch),
            total_amount=batch_total(batch),
        )
        logger.info(
            "bank_file_generated",
            format=fmt.value,
            record_count=result.record_count,
            total_amount=str(result.total_amount),
            filename=result.filename,
        )
        return result


def generate_bank_file(
    format: BankFileFormat | str,
    payments: Iterable[PaymentInput],
    metadata: MetadataInput = None,
    *,
    now: datetime | None = None,
    settings: AppSettings | None = None,
) -> BankFileResult:
    """Module-level shortcut for ``BankFileService(settings).generate(...)``."""
    return BankFileService(settings).generate(format, payments, metadata, now=now)
