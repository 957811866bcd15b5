#!/usr/bin/env python3
"""
GEMSCRIBE ENGINE - The Orchestrator
-----------------------------------
Drives the metadata pipeline over every input location (single .gem
files or directories of them) and keeps the overall success signal.

Processing is strictly sequential. A failing archive is reported through
the sink's error event and the loop moves on; only the exit status
remembers it.

Author: Gemscribe Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from gemscribe.core.config import ParserConfig
from gemscribe.core.errors import GemscribeError, InputError
from gemscribe.core.events import GemEventSink
from gemscribe.extraction.pipeline import MetadataPipeline

logger = logging.getLogger("gemscribe.engine")


class GemParseEngine:
    """
    Principal orchestrator: one sink, one pipeline, many archives.
    """

    def __init__(self, sink: GemEventSink, config: Optional[ParserConfig] = None):
        self.sink = sink
        self.config = config or ParserConfig()
        self.pipeline = MetadataPipeline(self.config)
        self.failures: List[str] = []

    def parse(self, locations: Iterable[str]) -> int:
        """
        Processes every location in order.
        Returns 0 if everything succeeded, 1 if any input or archive failed.
        """
        self.failures = []
        self.sink.parse_start()

        for location in locations:
            try:
                ok = self._add_location(Path(location))
            except InputError as e:
                self._fail(str(location), str(e))
                continue
            if not ok:
                # Each failing archive was already reported by add_gem
                logger.debug(f"Error parsing {location}")

        self.sink.parse_end()
        return 1 if self.failures else 0

    def _add_location(self, path: Path) -> bool:
        try:
            if path.is_file():
                return self.add_gem(path)
            if path.is_dir():
                return self.add_gem_dir(path)
        except OSError as e:
            raise InputError(f"Cannot access {path}: {e.strerror or str(e)}")
        raise InputError(f"Input path not found: {path}")

    def add_gem_dir(self, directory: Path) -> bool:
        """Processes every archive matching the glob directly inside `directory`."""
        try:
            matches = sorted(p for p in Path(directory).glob(self.config.gem_glob) if p.is_file())
        except OSError as e:
            raise InputError(f"Reading error in {directory}: {e.strerror or str(e)}")

        if not matches:
            raise InputError(f"No files found matching {self.config.gem_glob} in {directory}")

        ok = True
        for gem_path in matches:
            if not self.add_gem(gem_path):
                ok = False
        return ok

    def add_gem(self, gem_path: Path) -> bool:
        """Runs one archive. Returns False (after reporting) if it failed."""
        self.sink.gem_start(str(gem_path))
        try:
            self.pipeline.run(str(gem_path), self.sink)
            return True
        except GemscribeError as e:
            self._fail(str(gem_path), f"Error reading gem file {gem_path}: {str(e)}")
            return False
        finally:
            self.sink.gem_end()

    def _fail(self, unit: str, message: str):
        self.failures.append(unit)
        self._report(message)

    def _report(self, message: str):
        logger.error(message)
        self.sink.error(message)

    def generate_summary(self) -> dict:
        return {
            "failed": len(self.failures),
            "failed_units": list(self.failures),
        }
