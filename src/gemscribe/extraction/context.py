#!/usr/bin/env python3
"""
GEMSCRIBE EXTRACTION CONTEXT
----------------------------
State record for one archive moving through the pipeline. Each stage
fills in its part; the engine reads it back for logging.

Author: Gemscribe Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Optional

from gemscribe.core.models import Document


@dataclass
class GemContext:
    path: str                              # The archive being processed
    compressed_len: int = 0                # Size of the raw metadata.gz entry
    metadata_len: int = 0                  # Size after inflation
    metadata_text: Optional[str] = None    # Decoded YAML specification
    document: Optional[Document] = None    # Parsed tree; dropped once extraction ends
    extracted: bool = False                # True once the extractor walked the root
