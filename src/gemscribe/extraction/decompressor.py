#!/usr/bin/env python3
"""
GEMSCRIBE STREAM DECOMPRESSOR
-----------------------------
Inflates the metadata.gz payload. The gzip header is a fixed-size prefix
that is skipped outright; the remainder is decoded as a raw deflate
stream. Output grows in fixed chunks, and an optional ceiling guards
against decompression bombs.

Author: Gemscribe Team
Date: 2026-10-19
"""

import logging
import zlib
from typing import Optional

from gemscribe.core.errors import DecompressionError

logger = logging.getLogger("gemscribe.decompressor")

GZIP_HEADER_LEN = 10


class StreamDecompressor:

    def __init__(self, header_len: int = GZIP_HEADER_LEN, chunk_size: int = 4096,
                 max_output: Optional[int] = None):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.header_len = header_len
        self.chunk_size = chunk_size
        self.max_output = max_output

    def inflate(self, data: bytes) -> bytes:
        """
        Decodes `data` (header included) and returns the full output.

        Raises DecompressionError with reason MALFORMED for corrupt input,
        TRUNCATED when the stream ends before its end marker, and LIMIT when
        the output would exceed max_output.
        """
        if len(data) < self.header_len:
            raise DecompressionError(
                f"Stream too short: {len(data)} bytes, header alone is {self.header_len}",
                DecompressionError.MALFORMED,
            )

        inflater = zlib.decompressobj(-zlib.MAX_WBITS)
        pending = memoryview(data)[self.header_len:]
        out = bytearray()

        try:
            while not inflater.eof:
                # Bounded step: at most chunk_size bytes of new output per call
                chunk = inflater.decompress(pending, self.chunk_size)
                out.extend(chunk)
                self._check_limit(len(out))
                pending = inflater.unconsumed_tail
                if not chunk and not pending:
                    break
            if not inflater.eof:
                out.extend(inflater.flush())
                self._check_limit(len(out))
        except zlib.error as e:
            raise DecompressionError(f"Malformed compressed stream: {str(e)}",
                                     DecompressionError.MALFORMED)

        if not inflater.eof:
            raise DecompressionError(
                f"Unexpected end of compressed data after {len(out)} bytes of output",
                DecompressionError.TRUNCATED,
            )

        logger.debug(f"Inflated {len(data)} -> {len(out)} bytes")
        return bytes(out)

    def _check_limit(self, size: int):
        if self.max_output is not None and size > self.max_output:
            raise DecompressionError(
                f"Decompressed output exceeds the {self.max_output} byte limit",
                DecompressionError.LIMIT,
            )
