#!/usr/bin/env python3
"""
GEMSCRIBE SUSETAGS WRITER
-------------------------
Writes a plain-text tagged package catalog (the "susetags" format read
by zypper / libsolv) for a directory of gems:

    <target>/suse/setup/descr/packages.gz      package identity + requires
    <target>/suse/setup/descr/packages.en.gz   summaries and descriptions

A gem's name and version may appear after its dependencies in the
specification, so each gem is buffered and written out at gem_end.

Author: Gemscribe Team
Date: 2026-10-19
"""

import gzip
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from gemscribe.core.config import ParserConfig
from gemscribe.core.events import GemEventSink
from gemscribe.core.models import Constraint, Dependency

logger = logging.getLogger("gemscribe.susetags")

DESCR_DIR = Path("suse") / "setup" / "descr"
SEPARATOR = "##----------------------------------------\n"


class _PendingGem:
    def __init__(self, path: str):
        self.path = path
        self.name: Optional[str] = None
        self.version: Optional[str] = None
        self.summary: Optional[str] = None
        self.description: Optional[str] = None
        self.requires: List[Constraint] = []
        self.has_deps = False


class SusetagsWriter(GemEventSink):
    """
    Usage:
        with SusetagsWriter(repo_dir) as writer:
            GemParseEngine(writer).parse([repo_dir])
    """

    def __init__(self, target_dir: str, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.descr_dir = Path(target_dir) / DESCR_DIR
        self.packages = None
        self.packages_en = None
        self._gem: Optional[_PendingGem] = None
        self.written = 0

    @property
    def packages_path(self) -> Path:
        return self.descr_dir / "packages.gz"

    @property
    def packages_en_path(self) -> Path:
        return self.descr_dir / "packages.en.gz"

    def open(self) -> "SusetagsWriter":
        self.descr_dir.mkdir(parents=True, exist_ok=True)
        self.packages = gzip.open(self.packages_path, "wt", encoding="utf-8")
        self.packages_en = gzip.open(self.packages_en_path, "wt", encoding="utf-8")
        return self

    def close(self):
        for handle in (self.packages, self.packages_en):
            if handle is not None:
                handle.close()
        self.packages = self.packages_en = None

    def __enter__(self) -> "SusetagsWriter":
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # --- Event hooks ---

    def parse_start(self) -> None:
        self.packages.write("=Ver: 2.0\n")

    def gem_start(self, path: str) -> None:
        logger.info(f"file: {path}")
        self._gem = _PendingGem(path)

    def attribute(self, key: str, value: str) -> None:
        if self._gem is not None and key in ("name", "version", "summary", "description"):
            setattr(self._gem, key, value)

    def deps_start(self) -> None:
        if self._gem is not None:
            self._gem.has_deps = True

    def dependency(self, dependency: Dependency, constraints: Tuple[Constraint, ...]) -> None:
        if self._gem is not None:
            self._gem.requires.extend(constraints)

    def error(self, message: str) -> None:
        logger.debug(f"Upstream error: {message}")

    def gem_end(self) -> None:
        gem, self._gem = self._gem, None
        if gem is None:
            return
        if not gem.name or not gem.version:
            logger.warning(f"Skipping {gem.path}: no name or version extracted")
            return
        self._write_gem(gem)
        self.written += 1

    # --- Output ---

    def _pkg_line(self, gem: _PendingGem) -> str:
        return f"=Pkg: {self.config.namespaced(gem.name)} {gem.version} 0 {self.config.arch}\n"

    def _write_gem(self, gem: _PendingGem):
        pkg_line = self._pkg_line(gem)

        self.packages.write(SEPARATOR)
        self.packages.write(pkg_line)
        if gem.has_deps:
            self.packages.write("+Req:\n")
            for constraint in gem.requires:
                self.packages.write(f"{constraint}\n")
            self.packages.write("-Req:\n")

        self.packages_en.write(SEPARATOR)
        self.packages_en.write(pkg_line)
        if gem.summary is not None:
            self.packages_en.write(f"=Sum: {gem.summary}\n")
        if gem.description is not None:
            self.packages_en.write(f"+Des:\n{gem.description}\n-Des:\n")
