#!/usr/bin/env python3
"""
GEMSCRIBE METADATA PIPELINE
---------------------------
Runs one gem archive through the fixed extraction sequence:

    1. Locate metadata.gz in the container (everything else is skipped)
    2. Read the entry and inflate it past its gzip header
    3. Parse the YAML specification into a document tree
    4. Walk the tree, emitting attribute and dependency events

Any stage may raise a GemscribeError; the engine decides what to report.

Author: Gemscribe Team
Date: 2026-10-19
"""

import logging
from typing import Optional

from gemscribe.core.config import ParserConfig
from gemscribe.core.errors import DocumentParseError, MissingEntryError
from gemscribe.core.events import GemEventSink
from gemscribe.extraction import document as yaml_document
from gemscribe.extraction.archive import ArchiveReader
from gemscribe.extraction.context import GemContext
from gemscribe.extraction.decompressor import StreamDecompressor
from gemscribe.extraction.extractor import RecordExtractor
from gemscribe.extraction.translator import ConstraintTranslator

logger = logging.getLogger("gemscribe.pipeline")


class MetadataPipeline:

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.decompressor = StreamDecompressor(
            header_len=self.config.gzip_header_len,
            chunk_size=self.config.chunk_size,
            max_output=self.config.max_metadata_size,
        )
        self.translator = ConstraintTranslator(prefix=self.config.name_prefix)

    def read_metadata(self, context: GemContext) -> bytes:
        """Pulls the compressed metadata entry out of the archive."""
        with ArchiveReader(context.path, chunk_size=self.config.chunk_size,
                           max_entry_size=self.config.max_entry_size) as archive:
            entry = archive.find(self.config.metadata_entry)
            if entry is None:
                raise MissingEntryError(
                    f"No '{self.config.metadata_entry}' entry in {context.path}"
                )
            raw = entry.read()

        context.compressed_len = len(raw)
        return bytes(raw)

    def run(self, path: str, sink: GemEventSink) -> GemContext:
        context = GemContext(path=str(path))

        # --- PHASE 1: CONTAINER ---
        compressed = self.read_metadata(context)

        # --- PHASE 2: INFLATE ---
        metadata = self.decompressor.inflate(compressed)
        context.metadata_len = len(metadata)

        try:
            context.metadata_text = metadata.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DocumentParseError(f"Metadata of {path} is not valid UTF-8: {str(e)}")
        sink.gem_metadata(context.metadata_text)

        # --- PHASE 3: PARSE ---
        context.document = yaml_document.parse(context.metadata_text)

        # --- PHASE 4: EXTRACT ---
        extractor = RecordExtractor(sink, self.translator, self.config.attribute_keys)
        try:
            extractor.extract(context.document)
            context.extracted = True
        finally:
            context.document = None

        logger.debug(
            f"{path}: {context.compressed_len} compressed -> {context.metadata_len} bytes of metadata"
        )
        return context
