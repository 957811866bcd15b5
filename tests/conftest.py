"""
Shared fixtures: real .gem archives built on the fly with tarfile + gzip,
and a sink that records every event it receives.
"""

import gzip
import io
import tarfile
from pathlib import Path
from typing import Dict, Optional

import pytest

from gemscribe.core.events import GemEventSink

TROLLOP_SPEC = """\
--- !ruby/object:Gem::Specification
name: trollop
version: !ruby/object:Gem::Version
  version: 1.16.2
platform: ruby
authors:
- William Morgan
autorequire:
bindir: bin
date: 2010-04-06 00:00:00 -07:00
dependencies:
- !ruby/object:Gem::Dependency
  name: log4r
  type: :runtime
  version_requirement:
  version_requirements: !ruby/object:Gem::Requirement
    requirements:
    - - "~>"
      - !ruby/object:Gem::Version
        version: 1.0.5
    version:
- !ruby/object:Gem::Dependency
  name: rake
  type: :development
  version_requirement:
  version_requirements: !ruby/object:Gem::Requirement
    requirements:
    - - ">="
      - !ruby/object:Gem::Version
        version: "0.8"
    version:
homepage: http://trollop.rubyforge.org
summary: Trollop is a commandline option parser for Ruby that just gets out of your way.
description: Trollop is a commandline option parser for Ruby.
"""


def spec_for(name: str, version: str) -> str:
    """A minimal dependency-free specification."""
    return (
        "--- !ruby/object:Gem::Specification\n"
        f"name: {name}\n"
        "version: !ruby/object:Gem::Version\n"
        f"  version: {version}\n"
        f"summary: The {name} gem\n"
    )


def build_gem(path: Path, metadata: Optional[str] = None,
              metadata_gz: Optional[bytes] = None,
              extra_entries: Optional[Dict[str, bytes]] = None) -> Path:
    """
    Writes a gem-shaped tar. `metadata` is gzip-compressed into metadata.gz;
    `metadata_gz` places raw bytes there instead; passing neither omits it.
    """
    entries = {}
    if metadata is not None:
        entries["metadata.gz"] = gzip.compress(metadata.encode("utf-8"))
    elif metadata_gz is not None:
        entries["metadata.gz"] = metadata_gz
    entries["data.tar.gz"] = gzip.compress(b"lib/trollop.rb contents" * 50)
    entries["checksums.yaml.gz"] = gzip.compress(b"---\nSHA256: {}\n")
    if extra_entries:
        entries.update(extra_entries)

    with tarfile.open(path, "w") as tar:
        for name, payload in entries.items():
            info = tarfile.TarInfo(name)
            info.size = len(payload)
            tar.addfile(info, io.BytesIO(payload))
    return path


class EventRecorder(GemEventSink):
    """Keeps every event as a tuple, in arrival order."""

    def __init__(self):
        self.events = []

    def parse_start(self):
        self.events.append(("parse_start",))

    def gem_start(self, path):
        self.events.append(("gem_start", path))

    def gem_metadata(self, text):
        self.events.append(("gem_metadata", text))

    def attribute(self, key, value):
        self.events.append(("attribute", key, value))

    def deps_start(self):
        self.events.append(("deps_start",))

    def dependency(self, dependency, constraints):
        self.events.append(("dependency", dependency, constraints))

    def deps_end(self):
        self.events.append(("deps_end",))

    def gem_end(self):
        self.events.append(("gem_end",))

    def parse_end(self):
        self.events.append(("parse_end",))

    def error(self, message):
        self.events.append(("error", message))

    def kinds(self):
        return [e[0] for e in self.events]

    def of_kind(self, kind):
        return [e for e in self.events if e[0] == kind]

    def attributes(self):
        return [(e[1], e[2]) for e in self.events if e[0] == "attribute"]


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def trollop_gem(tmp_path):
    return build_gem(tmp_path / "trollop-1.16.2.gem", metadata=TROLLOP_SPEC)
