"""Streaming writer for gzip-compressed tar archives."""

from __future__ import annotations

import struct
import tarfile
import zlib
from typing import Any, BinaryIO, Optional

_BLOCK_SIZE = 512
# Magic, deflate method, no flags, zero mtime, no extra flags, unknown OS.
_GZIP_HEADER = b"\x1f\x8b\x08\x00\x00\x00\x00\x00\x00\xff"


class _GzipStream:
    """Writes a gzip member to a sink; the header goes out on the first write."""

    def __init__(self, sink: BinaryIO) -> None:
        self._sink = sink
        self._compressor = zlib.compressobj(
            zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, -zlib.MAX_WBITS
        )
        self._crc = 0
        self._size = 0
        self._header_written = False
        self._closed = False

    def _ensure_header(self) -> None:
        if not self._header_written:
            self._header_written = True
            self._sink.write(_GZIP_HEADER)

    def write(self, data: bytes) -> None:
        if self._closed:
            raise ValueError("write to closed gzip stream")
        self._ensure_header()
        self._crc = zlib.crc32(data, self._crc)
        self._size += len(data)
        out = self._compressor.compress(data)
        if out:
            self._sink.write(out)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._ensure_header()
        tail = self._compressor.flush() + struct.pack(
            "<II", self._crc, self._size & 0xFFFFFFFF
        )
        self._sink.write(tail)


class TarGzipWriter:
    """Writes a ``tar.gz`` stream to a binary file-like object.

    Start each file with :meth:`write_header`, then :meth:`write` its content.
    Closing finishes the archive but leaves the underlying file open.
    """

    def __init__(self, fileobj: BinaryIO) -> None:
        self._gzip = _GzipStream(fileobj)
        self._remaining = 0
        self._padding = 0
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("write to closed tar gzip writer")

    def _finish_entry(self) -> None:
        if self._remaining:
            raise ValueError(f"missed writing {self._remaining} bytes")
        if self._padding:
            self._gzip.write(b"\0" * self._padding)
            self._padding = 0

    def write_header(self, info: tarfile.TarInfo) -> None:
        """Start a new file in the archive."""
        self._check_open()
        self._finish_entry()
        self._gzip.write(info.tobuf(tarfile.PAX_FORMAT, "utf-8", "surrogateescape"))
        size = info.size if info.isreg() else 0
        self._remaining = size
        self._padding = -size % _BLOCK_SIZE

    def write(self, data: bytes) -> int:
        """Add content to the current file; return the number of bytes written."""
        self._check_open()
        data = bytes(data)
        if len(data) > self._remaining:
            raise ValueError("write too long for the current tar entry")
        self._gzip.write(data)
        self._remaining -= len(data)
        return len(data)

    def close(self) -> None:
        """Finish the tar stream, then the gzip stream.

        Both are closed even if the first fails; an error from the gzip
        stream takes precedence. Closing twice does nothing.
        """
        if self._closed:
            return
        self._closed = True
        tar_error: Optional[Exception] = None
        try:
            self._finish_entry()
            self._gzip.write(b"\0" * (2 * _BLOCK_SIZE))
        except (OSError, ValueError) as exc:
            tar_error = exc
        self._gzip.close()
        if tar_error is not None:
            raise tar_error

    def __enter__(self) -> "TarGzipWriter":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()