#!/usr/bin/env python3
"""
GEMSCRIBE DOCUMENT MODEL
------------------------
Parses gem specifications into a generic Scalar / Sequence / Mapping tree.

RubyGems writes its metadata with Ruby object tags
(`!ruby/object:Gem::Specification`), which no Python constructor knows.
We therefore stop ruamel.yaml at the composition stage: the node graph is
complete and typed, but nothing is constructed from the tags.

The query surface is two total accessors that return None instead of
raising, whatever shape of node they are handed.

Author: Gemscribe Team
Date: 2026-10-19
"""

from typing import Dict, Optional, Union

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml import nodes as yaml_nodes

from gemscribe.core.errors import DocumentParseError
from gemscribe.core.models import Document, MappingNode, Node, ScalarNode, SequenceNode


def parse(data: Union[bytes, bytearray, str]) -> Document:
    """Composes one YAML document and converts it into the gemscribe tree."""
    if isinstance(data, (bytes, bytearray)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DocumentParseError(f"Metadata is not valid UTF-8: {str(e)}")
    else:
        text = data

    yaml = YAML(typ="rt")
    try:
        composed = yaml.compose(text)
        if composed is None:
            raise DocumentParseError("Error getting YAML document root node")
        return Document(root=_convert(composed, {}))
    except YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        where = f" (line {mark.line + 1}, column {mark.column + 1})" if mark else ""
        raise DocumentParseError(f"Error parsing YAML document{where}: {str(e)}")
    except RecursionError:
        # Both the composer and the conversion recurse once per nesting level
        raise DocumentParseError("Error parsing YAML document: nesting too deep")


def _convert(node: yaml_nodes.Node, seen: Dict[int, Node]) -> Node:
    """
    Mirrors a ruamel node graph. Aliases resolve to the node already built
    for their anchor, which also makes self-referencing anchors terminate.
    """
    known = seen.get(id(node))
    if known is not None:
        return known

    if isinstance(node, yaml_nodes.ScalarNode):
        converted = ScalarNode(value=str(node.value), tag=_tag_of(node))
        seen[id(node)] = converted
        return converted

    if isinstance(node, yaml_nodes.SequenceNode):
        sequence = SequenceNode(tag=_tag_of(node))
        seen[id(node)] = sequence
        sequence.items.extend(_convert(item, seen) for item in node.value)
        return sequence

    if isinstance(node, yaml_nodes.MappingNode):
        mapping = MappingNode(tag=_tag_of(node))
        seen[id(node)] = mapping
        for key, value in node.value:
            mapping.pairs.append((_convert(key, seen), _convert(value, seen)))
        return mapping

    raise DocumentParseError(f"Unsupported YAML node type: {type(node).__name__}")


def _tag_of(node: yaml_nodes.Node) -> Optional[str]:
    # Newer ruamel releases wrap tags in a Tag object
    return None if node.tag is None else str(node.tag)


# --- Accessors ---

def sequence_item(node: Optional[Node], index: int) -> Optional[Node]:
    """[] on a sequence: the item at 0-based `index`, or None."""
    if not isinstance(node, SequenceNode) or index < 0:
        return None
    for position, item in enumerate(node.items):
        if position == index:
            return item
    return None


def mapping_value(node: Optional[Node], key: str) -> Optional[Node]:
    """[] on a mapping: the value of the first scalar key equal to `key`, or None."""
    if not isinstance(node, MappingNode):
        return None
    for key_node, value in node.pairs:
        if isinstance(key_node, ScalarNode) and key_node.value == key:
            return value
    return None


def scalar_value(node: Optional[Node]) -> Optional[str]:
    """The text of a scalar node, or None for anything else."""
    if isinstance(node, ScalarNode):
        return node.value
    return None
