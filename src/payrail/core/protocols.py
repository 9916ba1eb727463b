"""Protocol interfaces for Payrail abstractions.

Structural typing only: encoders and file stores need no common base class
and can be checked with isinstance() in tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from payrail.models.payment import BankFileMetadata, Payment


# ---------------------------------------------------------------------------
# Format Encoder
# ---------------------------------------------------------------------------

@runtime_checkable
class IBankFileEncoder(Protocol):
    """Turns a payment batch into the file body for one banking rail."""

    def encode(
        self,
        payments: Sequence[Payment],
        metadata: BankFileMetadata,
        created_at: datetime,
    ) -> str: ...


# ---------------------------------------------------------------------------
# File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """S3-compatible file storage interface."""

    def read(self, path: str) -> bytes: ...

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str: ...

    def list_files(self, prefix: str) -> list[str]: ...
