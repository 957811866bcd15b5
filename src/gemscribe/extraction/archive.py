#!/usr/bin/env python3
"""
GEMSCRIBE ARCHIVE READER
------------------------
Streams the entries of a gem container (a plain or compressed tar) in a
single forward pass. Nothing beyond the current entry is buffered, so
arbitrarily large data.tar.gz payloads can be stepped over for free.

Author: Gemscribe Team
Date: 2026-10-19
"""

import logging
import tarfile
import zlib
from pathlib import Path
from typing import Iterator, Optional

from gemscribe.core.errors import ArchiveOpenError, ArchiveReadError

logger = logging.getLogger("gemscribe.archive")

# Stream-level failures tarfile can surface while decoding entry data
_STREAM_ERRORS = (tarfile.TarError, EOFError, OSError, zlib.error)


class ArchiveEntry:
    """
    One member of the container. Valid only until the reader advances;
    callers either read() it completely or skip() it.
    """

    def __init__(self, tar: tarfile.TarFile, member: tarfile.TarInfo,
                 chunk_size: int, max_size: Optional[int]):
        self._tar = tar
        self._member = member
        self._chunk_size = chunk_size
        self._max_size = max_size
        self.consumed = False

    @property
    def name(self) -> str:
        return self._member.name

    def read(self) -> bytearray:
        """Reads the whole entry into a buffer owned by the caller."""
        if self.consumed:
            raise ArchiveReadError(f"Entry '{self.name}' was already consumed")
        self.consumed = True

        try:
            fileobj = self._tar.extractfile(self._member)
        except _STREAM_ERRORS as e:
            raise ArchiveReadError(f"Cannot open entry '{self.name}': {str(e)}")
        if fileobj is None:
            raise ArchiveReadError(f"Entry '{self.name}' is not a regular file")

        buffer = bytearray()
        try:
            while True:
                chunk = fileobj.read(self._chunk_size)
                if not chunk:
                    break
                buffer.extend(chunk)
                if self._max_size is not None and len(buffer) > self._max_size:
                    raise ArchiveReadError(
                        f"Entry '{self.name}' exceeds the {self._max_size} byte limit"
                    )
        except _STREAM_ERRORS as e:
            raise ArchiveReadError(f"Truncated or corrupt entry '{self.name}': {str(e)}")
        return buffer

    def skip(self):
        """Marks the entry as passed over; tarfile discards its data on advance."""
        self.consumed = True


class ArchiveReader:
    """
    Context manager around a streaming tarfile handle.

        with ArchiveReader("rake-13.0.6.gem") as archive:
            entry = archive.find("metadata.gz")
    """

    def __init__(self, path: str, chunk_size: int = 4096, max_entry_size: Optional[int] = None):
        self.path = Path(path)
        self.chunk_size = chunk_size
        self.max_entry_size = max_entry_size
        self._tar: Optional[tarfile.TarFile] = None
        self._fileobj = None

    def open(self) -> "ArchiveReader":
        try:
            self._fileobj = open(self.path, "rb")
        except OSError as e:
            raise ArchiveOpenError(f"Cannot open {self.path}: {e.strerror or str(e)}")

        try:
            # "r|*" = sequential access with transparent compression detection
            self._tar = tarfile.open(fileobj=self._fileobj, mode="r|*")
        except _STREAM_ERRORS as e:
            self._fileobj.close()
            self._fileobj = None
            raise ArchiveOpenError(f"{self.path} is not a recognized gem container: {str(e)}")
        return self

    def close(self):
        if self._tar is not None:
            self._tar.close()
            self._tar = None
        if self._fileobj is not None:
            self._fileobj.close()
            self._fileobj = None

    def __enter__(self) -> "ArchiveReader":
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def entries(self) -> Iterator[ArchiveEntry]:
        """Yields entries in archive order. Not restartable."""
        if self._tar is None:
            raise ArchiveOpenError(f"{self.path} is not open")

        members = iter(self._tar)
        while True:
            try:
                member = next(members)
            except StopIteration:
                return
            except _STREAM_ERRORS as e:
                raise ArchiveReadError(f"Corrupt archive {self.path}: {str(e)}")
            yield ArchiveEntry(self._tar, member, self.chunk_size, self.max_entry_size)

    def find(self, name: str) -> Optional[ArchiveEntry]:
        """Returns the first entry named exactly `name`, skipping the others."""
        for entry in self.entries():
            if entry.name == name:
                return entry
            logger.debug(f"Skipping entry {entry.name} in {self.path.name}")
            entry.skip()
        return None
