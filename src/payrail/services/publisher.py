"""Store a finished bank file through an IFileStore."""

from __future__ import annotations

from payrail.core.logging import get_logger
from payrail.core.protocols import IFileStore
from payrail.models.outputs import BankFileResult

logger = get_logger(__name__)


def publish_bank_file(store: IFileStore, result: BankFileResult, prefix: str = "bank-files") -> str:
    """Write ``result`` under ``prefix/filename`` with its content type.

    Returns the path reported by the store.
    """
    path = f"{prefix.strip('/')}/{result.filename}" if prefix.strip("/") else result.filename
    written = store.write(path, result.content.encode("utf-8"), content_type=result.content_type)
    logger.info(
        "bank_file_published",
        path=written,
        format=result.format.value,
        record_count=result.record_count,
    )
    return written
