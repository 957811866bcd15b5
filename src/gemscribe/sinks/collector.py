#!/usr/bin/env python3
"""
GEMSCRIBE RECORD COLLECTOR
--------------------------
Materializes the event stream into GemRecord objects, one per archive.

Author: Gemscribe Team
Date: 2026-10-19
"""

from typing import List, Optional, Tuple

from gemscribe.core.events import GemEventSink
from gemscribe.core.models import Constraint, Dependency, GemRecord

_RECORD_FIELDS = ("name", "version", "homepage", "summary", "description")


class RecordCollector(GemEventSink):
    """
    Keeps every gem that produced a name in `records`, everything else in
    `failed`. Errors raised outside any gem land in `errors`.
    """

    def __init__(self, prefix: str = "rubygem"):
        self.prefix = prefix
        self.records: List[GemRecord] = []
        self.failed: List[GemRecord] = []
        self.errors: List[str] = []
        self._current: Optional[GemRecord] = None

    def gem_start(self, path: str) -> None:
        self._current = GemRecord(path=path, prefix=self.prefix)

    def attribute(self, key: str, value: str) -> None:
        if self._current is not None and key in _RECORD_FIELDS:
            setattr(self._current, key, value)

    def dependency(self, dependency: Dependency, constraints: Tuple[Constraint, ...]) -> None:
        if self._current is not None:
            self._current.dependencies.append(dependency)
            self._current.constraints.extend(constraints)

    def error(self, message: str) -> None:
        if self._current is not None:
            self._current.errors.append(message)
        else:
            self.errors.append(message)

    def gem_end(self) -> None:
        record, self._current = self._current, None
        if record is None:
            return
        if record.name:
            self.records.append(record)
        else:
            self.failed.append(record)
