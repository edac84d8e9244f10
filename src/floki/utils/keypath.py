"""Lookup of values in YAML documents by dotted key path."""

from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from floki.errors import FailedToResolveKey, ProblemParsingDocument


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def parse_document(text: str, source: str) -> Any:
    """Parse the first YAML document in text.

    An empty document parses to None.
    """
    yaml = YAML(typ="safe", pure=True)
    try:
        return next(iter(yaml.load_all(text)), None)
    except YAMLError as e:
        raise ProblemParsingDocument(source, e) from e


def _as_index(segment: str):
    """Return the segment as a non-negative integer, or None."""
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def index_node(node: Any, segment: str) -> Any:
    """Index one level into a YAML node.

    Numeric segments are positions in sequences or integer keys in mappings.
    Any other segment is a string key of a mapping. Returns MISSING when the
    segment does not resolve against the node.
    """
    index = _as_index(segment)

    if isinstance(node, list):
        if index is not None and index < len(node):
            return node[index]
        return MISSING

    if isinstance(node, dict):
        if index is not None:
            return node.get(index, MISSING)
        return node.get(segment, MISSING)

    # Scalars cannot be indexed
    return MISSING


def resolve_key(document: Any, key: str, source: str) -> str:
    """Walk key through document and return the string it leads to."""
    node = document
    walked = []
    for segment in key.split("."):
        walked.append(segment)
        node = index_node(node, segment)
        if node is MISSING:
            raise FailedToResolveKey(key, source, f"'{'.'.join(walked)}' not found")

    if not isinstance(node, str):
        raise FailedToResolveKey(key, source, f"value is {type(node).__name__}, not a string")
    return node
