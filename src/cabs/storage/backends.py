from __future__ import annotations

import contextlib
import errno
import logging
import os
import secrets
from pathlib import Path, PurePath
from typing import Protocol

logger = logging.getLogger(__name__)

FILE_MODE = 0o666


class StorageBackend(Protocol):
    """Filesystem capabilities the blob store needs.

    Implementations raise builtin ``OSError`` subclasses; translating them into
    store errors is the caller's job.
    """

    def ensure_dir(self, path: Path) -> None:
        ...

    def put(self, path: Path, data: bytes) -> None:
        ...

    def get(self, path: Path) -> bytes:
        ...


def _fsync_dir(path: Path) -> None:
    flags = os.O_RDONLY
    if hasattr(os, "O_DIRECTORY"):
        flags |= os.O_DIRECTORY
    try:
        fd = os.open(path, flags)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)
    except OSError:
        # Windows and some filesystems refuse directory fsync.
        logger.debug("Directory fsync not supported for %s", path)


class LocalFilesystemBackend:
    def __init__(self, *, fsync: bool = True) -> None:
        self.fsync = fsync

    def ensure_dir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def put(self, path: Path, data: bytes) -> None:
        # Temp file lives next to the target so os.replace stays on one filesystem.
        tmp_path = path.with_name(f".{path.name}.{secrets.token_hex(8)}.tmp")
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, FILE_MODE)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                if self.fsync:
                    handle.flush()
                    os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        except BaseException:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            raise
        if self.fsync:
            _fsync_dir(path.parent)

    def get(self, path: Path) -> bytes:
        return path.read_bytes()


class MemoryBackend:
    """In-memory stand-in for the filesystem, used to test path logic off disk."""

    def __init__(self) -> None:
        self.files: dict[PurePath, bytes] = {}
        self.dirs: set[PurePath] = set()

    def ensure_dir(self, path: Path) -> None:
        key = PurePath(path)
        missing: list[PurePath] = []
        for candidate in (key, *key.parents):
            if candidate in self.files:
                if candidate == key:
                    raise FileExistsError(errno.EEXIST, "File exists", str(candidate))
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", str(candidate))
            if candidate in self.dirs or candidate == PurePath(candidate.anchor):
                break
            missing.append(candidate)
        self.dirs.update(missing)

    def put(self, path: Path, data: bytes) -> None:
        key = PurePath(path)
        if key.parent not in self.dirs:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        if key in self.dirs:
            raise IsADirectoryError(errno.EISDIR, "Is a directory", str(path))
        self.files[key] = bytes(data)

    def get(self, path: Path) -> bytes:
        key = PurePath(path)
        if key in self.dirs:
            raise IsADirectoryError(errno.EISDIR, "Is a directory", str(path))
        try:
            return self.files[key]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path)) from None
