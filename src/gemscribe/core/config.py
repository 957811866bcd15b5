#!/usr/bin/env python3
"""
GEMSCRIBE CONFIG
----------------
Runtime knobs for the extraction pipeline. Defaults reproduce the layout
of a standard RubyGems archive; the size ceilings are off unless set.

Author: Gemscribe Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Tuple

from ruamel.yaml import YAML, YAMLError

logger = logging.getLogger("gemscribe.config")

DEFAULT_ATTRIBUTE_KEYS = ("name", "version", "homepage", "summary", "description")

# Smallest accepted value of each integer setting
_INT_MINIMUMS = {"gzip_header_len": 0, "chunk_size": 1, "max_entry_size": 0, "max_metadata_size": 0}
_NULLABLE = {"max_entry_size", "max_metadata_size", "attribute_keys"}


@dataclass(frozen=True)
class ParserConfig:
    metadata_entry: str = "metadata.gz"
    gzip_header_len: int = 10
    chunk_size: int = 4096
    max_entry_size: Optional[int] = None
    max_metadata_size: Optional[int] = None
    gem_glob: str = "*.gem"
    name_prefix: str = "rubygem"
    attribute_keys: Optional[Tuple[str, ...]] = DEFAULT_ATTRIBUTE_KEYS
    arch: str = "x86_64"
    group: str = "Devel/Languages/Ruby"

    def namespaced(self, name: str) -> str:
        """Maps a gem name into the repository namespace (e.g. rubygem-rake)."""
        return f"{self.name_prefix}-{name}"

    def with_overrides(self, **overrides) -> "ParserConfig":
        """Returns a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "attribute_keys" in changes:
            changes["attribute_keys"] = tuple(changes["attribute_keys"])
        return replace(self, **changes)

    @classmethod
    def from_file(cls, path: str) -> "ParserConfig":
        """
        Loads overrides from a YAML mapping, e.g.:

            name_prefix: ruby2.7-rubygem
            max_metadata_size: 1048576

        Unknown keys are rejected so typos do not pass silently.
        """
        config_path = Path(path)
        try:
            data = YAML(typ="safe").load(config_path.read_text(encoding="utf-8"))
        except (OSError, YAMLError) as e:
            logger.error(f"Unable to load config from {config_path}")
            raise ValueError(f"Failed to load config: {str(e)}")

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

        return cls(**{key: _checked(key, value, config_path) for key, value in data.items()})


def _checked(key: str, value, config_path: Path):
    """Validates one file value against its field, converting lists to tuples."""
    if value is None and key in _NULLABLE:
        return None

    if key == "attribute_keys":
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return tuple(value)
        raise ValueError(f"{key} in {config_path} must be a list of strings")

    if key in _INT_MINIMUMS:
        # isinstance treats YAML booleans as ints
        if isinstance(value, bool) or not isinstance(value, int) or value < _INT_MINIMUMS[key]:
            raise ValueError(f"{key} in {config_path} must be an integer >= {_INT_MINIMUMS[key]}")
        return value

    if not isinstance(value, str):
        raise ValueError(f"{key} in {config_path} must be a string")
    return value
