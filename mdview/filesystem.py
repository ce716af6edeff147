"""Locating and reading Markdown documents from disk."""

from __future__ import annotations

import codecs
import os
import stat
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS
from .exceptions import DocumentDecodeError, DocumentTooLargeError

MAX_FILE_SIZE_ENV_VAR = "MDVIEW_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the size limit in bytes, honouring ``MDVIEW_MAX_FILE_SIZE``.

    Raises:
        ValueError: If the variable is set to anything but a positive integer.
    """
    raw = os.environ.get(MAX_FILE_SIZE_ENV_VAR, "").strip()
    if not raw:
        return default

    if not raw.isdigit() or int(raw) == 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw!r}")
    return int(raw)


def normalize_filepath(raw_path: str) -> Path:
    """Resolve and validate the path of a Markdown file to display.

    Args:
        raw_path: User-supplied path (absolute, relative, or ``~``-prefixed).

    Returns:
        Path: Absolute path to the Markdown file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, or does
            not carry a Markdown extension.

    Examples:
        normalize_filepath("docs/README.md")
        normalize_filepath("~/notes.markdown")
    """
    path = Path(raw_path).expanduser()

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")

    if resolved.suffix.lower() not in MARKDOWN_EXTENSIONS:
        supported = ", ".join(MARKDOWN_EXTENSIONS)
        raise ValueError(
            f"{resolved} is not a Markdown file.\nSupported extensions are: {supported}"
        )

    return resolved


def decode_document(data: bytes, filepath: Path) -> str:
    """Decode raw document bytes as UTF-8, dropping a leading byte-order mark.

    Raises:
        DocumentDecodeError: If `data` is not valid UTF-8.

    Examples:
        decode_document(codecs.BOM_UTF8 + b"# Title", Path("a.md"))  # "# Title"
    """
    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8) :]

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as error:
        raise DocumentDecodeError(filepath, error.start) from error


def read_document(filepath: Path, max_size: int) -> str:
    """Read a Markdown file as text, enforcing the size limit.

    Only regular files are opened. At most ``max_size + 1`` bytes are read, so
    a file that grows after it was checked still cannot exceed the limit.

    Args:
        filepath: File to read.
        max_size: Largest accepted size in bytes.

    Returns:
        str: Decoded document text. Line endings are left as found.

    Raises:
        OSError: If the file is missing, inaccessible, or not a regular file.
        DocumentTooLargeError: If the file holds more than `max_size` bytes.
        DocumentDecodeError: If the file is not valid UTF-8.

    Examples:
        text = read_document(Path("README.md"), 1024 * 1024)
    """
    mode = os.stat(filepath).st_mode
    if not stat.S_ISREG(mode):
        raise OSError(f"{filepath} is not a regular file.")

    with open(filepath, "rb") as handle:
        data = handle.read(max_size + 1)

    if len(data) > max_size:
        raise DocumentTooLargeError(filepath, max_size)

    return decode_document(data, filepath)
