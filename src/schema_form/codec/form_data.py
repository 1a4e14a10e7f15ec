"""
Form data codec.

Converts between the flat (key, value) pairs a browser submits and the
nested value tree the validator and renderer work on.

Key grammar, read left to right in one pass:

    key    := name ( "." name | "[" index "]" )*
    name   := [A-Za-z_][A-Za-z0-9_]*
    index  := "0" | [1-9][0-9]*

``attendees[1].email=x`` builds ``{"attendees": [{}, {"email": "x"}]}``.

The codec knows nothing about the data schema: every leaf it produces is a
string, and unchecked checkboxes are simply absent. Keys that do not fit the
grammar are skipped; the validator later reports the field as missing if it
is required.
"""

import logging
from collections.abc import Iterable

from schema_form.constants import MAX_LIST_INDEX, VALID_FIELD_NAME
from schema_form.models.values import NestedValue, PathSegment, ValueTree

logger = logging.getLogger("schema-form.codec")

# List slot not (yet) filled by any submitted key
_EMPTY = object()
_MISSING = object()


def parse_key(key: str) -> list[PathSegment] | None:
    """
    Split a submission key into name and index segments.

    Returns:
        The segments, or None if the key does not fit the grammar.
    """
    segments: list[PathSegment] = []
    expect_name = True
    i, n = 0, len(key)

    while i < n:
        if expect_name:
            j = i
            while j < n and key[j] not in ".[]":
                j += 1
            name = key[i:j]
            if not VALID_FIELD_NAME.match(name):
                return None
            segments.append(name)
            expect_name = False
            i = j
        elif key[i] == ".":
            expect_name = True
            i += 1
        elif key[i] == "[":
            close = key.find("]", i)
            if close == -1:
                return None
            digits = key[i + 1:close]
            if not (digits.isascii() and digits.isdigit()):
                return None
            # Leading zeros are malformed so that keys survive join_path unchanged
            if len(digits) > 1 and digits[0] == "0":
                return None
            index = int(digits)
            if index > MAX_LIST_INDEX:
                return None
            segments.append(index)
            i = close + 1
        else:
            return None

    # Empty key or trailing "."
    if expect_name:
        return None
    return segments


def encode(pairs: Iterable[tuple[str, str]]) -> ValueTree:
    """
    Build a nested value tree from flat submission pairs.

    Pairs are applied in order. When two pairs address the same leaf, the
    first one wins; a pair whose path conflicts with the shape already
    built (``a=1`` followed by ``a.b=2``) is skipped.
    """
    root: dict = {}
    for key, value in pairs:
        segments = parse_key(key)
        if segments is None:
            logger.debug("Ignoring malformed submission key %r", key)
            continue
        if not _assign(root, segments, value):
            logger.debug("Ignoring duplicate or conflicting submission key %r", key)
    return _finalize(root)


def decode(tree: ValueTree) -> list[tuple[str, str]]:
    """
    Flatten a nested value tree into submission pairs.

    ``True`` becomes ``"true"`` and ``False`` is omitted, mirroring how a
    browser submits checkboxes. Empty objects and lists produce no pairs,
    so ``encode(decode(tree)) == tree`` holds for trees of string leaves
    without empty containers; ``{"organizer": {}}`` comes back as ``{}``.
    """
    pairs: list[tuple[str, str]] = []
    _flatten(tree, [], pairs)
    return pairs


def join_path(segments: Iterable[PathSegment]) -> str:
    """Render segments in submission-key notation: ``attendees[0].email``."""
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(segment)
    return "".join(parts)


def lookup(tree: NestedValue | None, segments: Iterable[PathSegment]) -> NestedValue | None:
    """Walk ``segments`` into ``tree``; None if any step is absent."""
    node = tree
    for segment in segments:
        if isinstance(segment, int):
            if not isinstance(node, list) or segment >= len(node):
                return None
            node = node[segment]
        else:
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
    return node


def format_leaf(value: NestedValue) -> str:
    """String form of a leaf value, as it would appear in a submission."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _slot_get(container: dict | list, segment: PathSegment):
    if isinstance(container, dict):
        return container.get(segment, _MISSING)
    if segment < len(container):
        return container[segment]
    return _MISSING


def _slot_set(container: dict | list, segment: PathSegment, value) -> None:
    if isinstance(container, dict):
        container[segment] = value
        return
    while len(container) <= segment:
        container.append(_EMPTY)
    container[segment] = value


def _assign(root: dict, segments: list[PathSegment], value: str) -> bool:
    container: dict | list = root
    for segment, next_segment in zip(segments, segments[1:]):
        wanted = list if isinstance(next_segment, int) else dict
        child = _slot_get(container, segment)
        if child is _MISSING or child is _EMPTY:
            child = wanted()
            _slot_set(container, segment, child)
        elif not isinstance(child, wanted):
            return False
        container = child

    existing = _slot_get(container, segments[-1])
    if existing is not _MISSING and existing is not _EMPTY:
        return False
    _slot_set(container, segments[-1], value)
    return True


def _finalize(node):
    """Replace unfilled list slots with empty values of the neighbours' shape."""
    if isinstance(node, dict):
        return {name: _finalize(child) for name, child in node.items()}
    if isinstance(node, list):
        holds_objects = any(isinstance(child, dict) for child in node)
        filler = dict if holds_objects else str
        return [filler() if child is _EMPTY else _finalize(child) for child in node]
    return node


def _flatten(value: NestedValue, path: list[PathSegment], pairs: list[tuple[str, str]]) -> None:
    if isinstance(value, dict):
        for name, child in value.items():
            _flatten(child, path + [name], pairs)
    elif isinstance(value, list):
        for index, child in enumerate(value):
            _flatten(child, path + [index], pairs)
    elif isinstance(value, bool):
        if value:
            pairs.append((join_path(path), "true"))
    elif value is not None:
        pairs.append((join_path(path), format_leaf(value)))
