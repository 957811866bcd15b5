#!/usr/bin/env python3
"""
GEMSCRIBE EVENTS - The Sink Contract
------------------------------------
The extraction core reports everything it finds through a single sink,
one method call per event, strictly in this order:

    parse_start
      gem_start -> [gem_metadata] -> attribute* -> [deps_start -> dependency* -> deps_end] -> gem_end
      ... one block per archive ...
    parse_end

`error` may arrive between any two events and never ends the sequence.
Writers subclass GemEventSink and override only what they need.

Author: Gemscribe Team
Date: 2026-10-19
"""

from typing import Tuple

from gemscribe.core.models import Constraint, Dependency


class GemEventSink:
    """No-op base sink. Every hook is optional."""

    def parse_start(self) -> None:
        pass

    def gem_start(self, path: str) -> None:
        pass

    def gem_metadata(self, text: str) -> None:
        """Receives the full decompressed YAML specification."""
        pass

    def attribute(self, key: str, value: str) -> None:
        pass

    def deps_start(self) -> None:
        pass

    def dependency(self, dependency: Dependency, constraints: Tuple[Constraint, ...]) -> None:
        pass

    def deps_end(self) -> None:
        pass

    def gem_end(self) -> None:
        pass

    def parse_end(self) -> None:
        pass

    def error(self, message: str) -> None:
        pass
