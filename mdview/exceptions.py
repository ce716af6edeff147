"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class DocumentError(ValueError):
    """Base class for errors raised while loading a Markdown document.

    Classification itself never fails; these cover the file boundary only.
    """


class EmptyDocumentError(DocumentError):
    """Raised when a document holds nothing but whitespace.

    Args:
        path: File that turned out to be blank.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"{path} is empty; nothing to render")


class DocumentTooLargeError(DocumentError):
    """Raised when a file exceeds the configured size limit.

    Args:
        path: Offending file.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, path: Path, limit: int):
        self.path = path
        self.limit = limit
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"{self.path} exceeds the maximum allowed size of {self.limit} bytes."


class DocumentDecodeError(DocumentError):
    """Raised when a file is not valid UTF-8.

    Args:
        path: Offending file.
        offset: Byte offset of the first undecodable byte, counted after any
            byte-order mark.
    """

    def __init__(self, path: Path, offset: int):
        self.path = path
        self.offset = offset
        super().__init__(f"Invalid UTF-8 sequence in {path} at byte {offset}.")
