"""Dict-backed file store for unit tests."""

from __future__ import annotations

from payrail.core.exceptions import FileStoreError


class MemoryFileStore:
    """Dict-backed IFileStore for unit tests."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._content_types: dict[str, str] = {}

    def read(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError as exc:
            raise FileStoreError(f"No such file: {path!r}") from exc

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        self._files[path] = data
        self._content_types[path] = content_type
        return path

    def content_type(self, path: str) -> str:
        return self._content_types[path]

    def list_files(self, prefix: str) -> list[str]:
        return [k for k in self._files if k.startswith(prefix)]
