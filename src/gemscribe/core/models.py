#!/usr/bin/env python3
"""
GEMSCRIBE CORE MODELS
---------------------
Defines the fundamental data structures used across the Gemscribe engine:
the generic document tree, dependency declarations, translated
constraints and the per-gem record handed to repository writers.

Author: Gemscribe Team
Date: 2026-10-19
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


# --- Document tree (closed variant: Scalar | Sequence | Mapping) ---

@dataclass(eq=False)
class ScalarNode:
    """A leaf value, kept as the exact text found in the document."""
    value: str
    tag: Optional[str] = None


@dataclass(eq=False)
class SequenceNode:
    """An ordered list of child nodes."""
    items: List["Node"] = field(default_factory=list)
    tag: Optional[str] = None


@dataclass(eq=False)
class MappingNode:
    """Ordered (key, value) pairs. Duplicate keys are kept in document order."""
    pairs: List[Tuple["Node", "Node"]] = field(default_factory=list)
    tag: Optional[str] = None


Node = Union[ScalarNode, SequenceNode, MappingNode]


@dataclass
class Document:
    """A parsed metadata document. Owns every node reachable from root."""
    root: Node


# --- Dependencies & constraints ---

class Comparator(enum.IntFlag):
    """Relation bits, laid out like libsolv's REL_GT / REL_EQ / REL_LT."""
    GT = 1
    EQ = 2
    LT = 4

    @property
    def symbol(self) -> str:
        return _SYMBOLS.get(int(self), "")


_SYMBOLS = {
    1: ">",
    2: "=",
    3: ">=",
    4: "<",
    5: "<>",
    6: "<=",
}


@dataclass(frozen=True)
class Dependency:
    """One requirement line as written in the gem specification."""
    name: str
    operator: str
    version: str


@dataclass(frozen=True)
class Constraint:
    """A normalized comparison against a namespaced package name."""
    name: str
    comparator: Comparator
    version: str

    def __str__(self) -> str:
        return f"{self.name} {self.comparator.symbol} {self.version}"


@dataclass
class GemRecord:
    """
    Everything Gemscribe recovered about one archive.

    Built incrementally by the collector sink; every field is a copy so the
    record outlives the parsed document.
    """
    path: str
    name: Optional[str] = None
    version: Optional[str] = None
    homepage: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    dependencies: List[Dependency] = field(default_factory=list)
    constraints: List[Constraint] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    prefix: str = "rubygem"

    @property
    def package_name(self) -> Optional[str]:
        if not self.name:
            return None
        return f"{self.prefix}-{self.name}"

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "name": self.name,
            "package": self.package_name,
            "version": self.version,
            "homepage": self.homepage,
            "summary": self.summary,
            "description": self.description,
            "dependencies": [
                {"name": d.name, "operator": d.operator, "version": d.version}
                for d in self.dependencies
            ],
            "requires": [str(c) for c in self.constraints],
            "errors": list(self.errors),
        }
