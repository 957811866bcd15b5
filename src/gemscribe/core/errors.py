#!/usr/bin/env python3
"""
GEMSCRIBE ERRORS - Failure Taxonomy
-----------------------------------
Every failure raised inside the extraction pipeline derives from
GemscribeError. The class says how much work is abandoned:
an input path, an archive, or a single dependency item.

Author: Gemscribe Team
Date: 2026-10-19
"""


class GemscribeError(Exception):
    """Base class for all extraction failures."""


class InputError(GemscribeError):
    """A top-level input path is missing, unreadable or holds no gems."""


class ArchiveError(GemscribeError):
    """The gem container could not be processed."""


class ArchiveOpenError(ArchiveError):
    pass


class ArchiveReadError(ArchiveError):
    pass


class MissingEntryError(ArchiveError):
    pass


class DecompressionError(GemscribeError):
    """
    Raised when the metadata stream cannot be inflated.

    `reason` is one of MALFORMED, TRUNCATED or LIMIT so callers can tell a
    corrupt stream from one that simply stops early.
    """

    MALFORMED = "malformed"
    TRUNCATED = "truncated"
    LIMIT = "limit"

    def __init__(self, message: str, reason: str = MALFORMED):
        super().__init__(message)
        self.reason = reason


class DocumentParseError(GemscribeError):
    """The metadata is not a usable YAML document."""


class ExpectedMappingError(DocumentParseError):
    pass


class ExpectedSequenceError(DocumentParseError):
    pass


class FieldExtractionError(GemscribeError):
    """A dependency item lacks a required nested field. Local to that item."""


class InvalidVersionError(FieldExtractionError):
    pass
