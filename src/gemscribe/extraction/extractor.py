#!/usr/bin/env python3
"""
GEMSCRIBE RECORD EXTRACTOR
--------------------------
Walks the root mapping of a gem specification and reports what it finds
to the sink, in document order.

Scalars become attribute events. Only two compound keys are understood,
`version` and `dependencies`; the dispatch table below is closed and any
other compound value is ignored. A broken dependency item is reported
and skipped without disturbing its siblings.

Author: Gemscribe Team
Date: 2026-10-19
"""

import logging
from typing import Callable, Dict, Iterable, Optional

from gemscribe.core.errors import (
    ExpectedMappingError,
    ExpectedSequenceError,
    FieldExtractionError,
    GemscribeError,
)
from gemscribe.core.events import GemEventSink
from gemscribe.core.models import Dependency, Document, MappingNode, Node, ScalarNode, SequenceNode
from gemscribe.extraction.document import mapping_value, scalar_value, sequence_item
from gemscribe.extraction.translator import ConstraintTranslator

logger = logging.getLogger("gemscribe.extractor")


class RecordExtractor:

    def __init__(self, sink: GemEventSink, translator: Optional[ConstraintTranslator] = None,
                 attribute_keys: Optional[Iterable[str]] = None):
        self.sink = sink
        self.translator = translator or ConstraintTranslator()
        # None means every scalar attribute is reported
        self.attribute_keys = None if attribute_keys is None else frozenset(attribute_keys)

        self.compound_handlers: Dict[str, Callable[[Node], None]] = {
            "version": self._parse_version,
            "dependencies": self._parse_dependencies,
        }

    def extract(self, document: Document):
        """
        Emits the attribute and dependency events for one document.
        Raises ExpectedMappingError if the root is not a mapping.
        """
        root = document.root
        if not isinstance(root, MappingNode):
            raise ExpectedMappingError("Root of the gem specification is not a mapping")

        for key_node, value in root.pairs:
            key = scalar_value(key_node)
            if key is None:
                logger.debug("Skipping non-scalar key in root mapping")
                continue

            if isinstance(value, ScalarNode):
                self._emit_attribute(key, value.value)
                continue

            handler = self.compound_handlers.get(key)
            if handler is None:
                continue
            try:
                handler(value)
            except GemscribeError as e:
                self._report(str(e))

    def _emit_attribute(self, key: str, value: str):
        if self.attribute_keys is None or key in self.attribute_keys:
            self.sink.attribute(key, value)

    def _report(self, message: str):
        logger.warning(message)
        self.sink.error(message)

    def _parse_version(self, node: Node):
        """
        version: !ruby/object:Gem::Version
          version: 0.4.1
        """
        version = scalar_value(mapping_value(node, "version"))
        if version is None:
            raise FieldExtractionError("Error parsing version")
        self._emit_attribute("version", version)

    def _parse_dependencies(self, node: Node):
        """
        dependencies:
        - !ruby/object:Gem::Dependency
          name: trollop
          type: :runtime
          version_requirements: !ruby/object:Gem::Requirement
            requirements:
            - - ">="
              - !ruby/object:Gem::Version
                version: 1.0.5
        """
        if not isinstance(node, SequenceNode):
            raise ExpectedSequenceError("Error parsing deps: 'dependencies' is not a sequence")

        self.sink.deps_start()
        for index, item in enumerate(node.items):
            try:
                self._parse_dependency(item, index)
            except GemscribeError as e:
                self._report(str(e))
        self.sink.deps_end()

    def _parse_dependency(self, node: Node, index: int):
        if not isinstance(node, MappingNode):
            raise FieldExtractionError(f"Error parsing dependency #{index}: not a mapping")

        name = scalar_value(mapping_value(node, "name"))
        if name is None:
            raise FieldExtractionError(f"Error parsing dependency #{index}: missing name")

        # Newer RubyGems write both keys; older ones only version_requirements
        requirement = mapping_value(node, "version_requirements")
        if requirement is None:
            requirement = mapping_value(node, "requirement")

        requirements = mapping_value(requirement, "requirements")
        if not isinstance(requirements, SequenceNode):
            raise FieldExtractionError(f"Error parsing dependency '{name}': missing requirements")

        for item in requirements.items:
            try:
                self._parse_requirement(name, item)
            except GemscribeError as e:
                self._report(str(e))

    def _parse_requirement(self, name: str, node: Node):
        """
        - ">="
        - !ruby/object:Gem::Version
          version: 1.0.5
        """
        if not isinstance(node, SequenceNode):
            raise FieldExtractionError(f"Error parsing requirement of '{name}': not a sequence")

        operator = scalar_value(sequence_item(node, 0))
        if operator is None:
            raise FieldExtractionError(f"Error parsing requirement of '{name}': missing operator")

        version = scalar_value(mapping_value(sequence_item(node, 1), "version"))
        if version is None:
            raise FieldExtractionError(f"Error parsing requirement of '{name}': missing version")

        # An unbumpable version must not emit a partial dependency
        constraints = self.translator.translate(name, operator, version)
        self.sink.dependency(Dependency(name, operator, version), constraints)
