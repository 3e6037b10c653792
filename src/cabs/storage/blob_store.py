from __future__ import annotations

import logging
from pathlib import Path

from cabs.digests import compute_digest, shard_components, validate_digest
from cabs.errors import (
    DigestMismatchError,
    DirectoryError,
    NotFoundError,
    ReadError,
    WriteError,
)
from cabs.settings import StoreSettings
from cabs.storage.backends import LocalFilesystemBackend, StorageBackend

logger = logging.getLogger(__name__)


class BlobStore:
    """Files blobs under ``<root>/<first digest byte>/<remaining 31 bytes>`` in hex."""

    def __init__(
        self,
        root: Path | str,
        *,
        backend: StorageBackend | None = None,
        verify_on_read: bool = False,
    ) -> None:
        self.root = Path(root)
        self.backend = backend if backend is not None else LocalFilesystemBackend()
        self.verify_on_read = verify_on_read
        self._ensure_dir(self.root)

    @classmethod
    def from_settings(cls, settings: StoreSettings | None = None) -> BlobStore:
        settings = settings or StoreSettings()
        return cls(
            settings.base_dir,
            backend=LocalFilesystemBackend(fsync=settings.fsync),
            verify_on_read=settings.verify_on_read,
        )

    def path_for(self, digest: bytes) -> Path:
        shard, name = shard_components(digest)
        return self.root / shard / name

    def write(self, blob: bytes) -> bytes:
        digest = compute_digest(blob)
        target = self.path_for(digest)
        self._ensure_dir(target.parent)
        try:
            self.backend.put(target, blob)
        except OSError as exc:
            raise WriteError.from_os_error(exc, target) from exc
        logger.debug("Stored %d bytes at %s", len(blob), target)
        return digest

    def read(self, digest: bytes) -> bytes:
        digest = validate_digest(digest)
        target = self.path_for(digest)
        try:
            blob = self.backend.get(target)
        except FileNotFoundError as exc:
            raise NotFoundError(digest.hex(), target) from exc
        except OSError as exc:
            raise ReadError.from_os_error(exc, target) from exc
        if self.verify_on_read:
            actual = compute_digest(blob)
            if actual != digest:
                raise DigestMismatchError(target, digest.hex(), actual.hex())
        logger.debug("Read %d bytes from %s", len(blob), target)
        return blob

    def _ensure_dir(self, path: Path) -> None:
        try:
            self.backend.ensure_dir(path)
        except OSError as exc:
            raise DirectoryError.from_os_error(exc, path) from exc
