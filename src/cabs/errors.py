"""Typed exceptions raised by the blob store.

The I/O flavoured errors subclass ``OSError`` and carry the ``errno``,
``strerror`` and ``filename`` of the failure that caused them, so callers that
only catch ``OSError`` keep working.
"""

from __future__ import annotations

import errno
from pathlib import Path


class BlobStoreError(Exception):
    """Base class for all blob store errors."""


class _StoreOSError(BlobStoreError, OSError):
    action = "access"

    @classmethod
    def from_os_error(cls, exc: OSError, path: Path) -> _StoreOSError:
        reason = exc.strerror or str(exc)
        return cls(exc.errno, f"Could not {cls.action}: {reason}", str(path))


class DirectoryError(_StoreOSError):
    """Base directory or shard directory could not be created."""

    action = "create directory"


class WriteError(_StoreOSError):
    """Blob file could not be written."""

    action = "write blob"


class ReadError(_StoreOSError):
    """Blob file exists but could not be read."""

    action = "read blob"


class NotFoundError(BlobStoreError, FileNotFoundError):
    """No blob is stored under the requested digest."""

    def __init__(self, digest_hex: str, path: Path) -> None:
        self.digest_hex = digest_hex
        super().__init__(errno.ENOENT, f"Blob not found: {digest_hex}", str(path))


class InvalidDigestError(BlobStoreError, ValueError):
    """Key is not a 32 byte SHA-256 digest."""


class DigestMismatchError(BlobStoreError):
    """Stored bytes do not hash to the digest they are filed under."""

    def __init__(self, path: Path, expected: str, actual: str) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Digest verification failed for {path}\n"
            f"  Expected: {expected}\n"
            f"  Got:      {actual}\n"
            f"The blob may be corrupted or tampered with."
        )
