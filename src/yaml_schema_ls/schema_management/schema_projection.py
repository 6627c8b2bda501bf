"""Schema flattening and reference resolution service."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from .schema_models import SchemaEntry

_LOGGER = logging.getLogger(__name__)


class SchemaError(Exception):
    """Raised when a schema reference cannot be resolved."""


def resolve_ref(ref: str, root: Mapping[str, Any]) -> Mapping[str, Any] | None:
    """Walk a local ``#/a/b`` reference from the schema root."""
    if ref == "#":
        return root
    current: Any = root
    for raw_segment in ref.replace("#/", "", 1).split("/"):
        segment = raw_segment.replace("~1", "/").replace("~0", "~")
        if not isinstance(current, Mapping) or not current.get(segment):
            return None
        current = current[segment]
    return current if isinstance(current, Mapping) else None


def resolve_node(node: Mapping[str, Any], root: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return ``node`` with its ``$ref`` chain merged in, leaving ``node`` untouched.

    The referencing node's own fields win over the referenced ones; its
    description is kept when present and borrowed from the target otherwise.
    Nodes without ``$ref`` are returned as-is.

    Raises:
      SchemaError: If a reference in the chain cannot be resolved.
    """
    resolved, _ = _resolve_chain(node, root)
    return resolved


def flatten_schema(schema: Mapping[str, Any]) -> dict[str, SchemaEntry]:
    """Return flattened entries keyed by slash-joined structural path.

    Pattern-matched keys appear as ``*``, ``oneOf`` alternatives under
    ``<prefix>#<index>`` and definitions under ``$defs/<name>``.
    """
    entries: dict[str, SchemaEntry] = {}
    if isinstance(schema, Mapping):
        _flatten_node(schema, prefix="", root=schema, entries=entries, ancestors=frozenset())
    return entries


def schema_at_path(schema: Mapping[str, Any], path: Sequence[str]) -> Mapping[str, Any] | None:
    """Resolve the schema node describing the value at ``path``.

    Each segment is looked up in ``properties``, then in the first matching
    ``patternProperties`` regex, then again after resolving the current node's
    ``$ref``. Returns None as soon as a segment matches nothing.
    """
    current: Any = schema
    for segment in path:
        current = _child_schema(current, segment, schema)
        if current is None:
            return None
    try:
        return resolve_node(current, schema)
    except SchemaError as exc:
        _LOGGER.debug("Cannot resolve schema at %s: %s", "/".join(path), exc)
        return None


def _resolve_chain(
    node: Mapping[str, Any], root: Mapping[str, Any]
) -> tuple[Mapping[str, Any], tuple[int, ...]]:
    identities = [id(node)]
    if not isinstance(node.get("$ref"), str):
        return node, tuple(identities)

    resolved = dict(node)
    seen_refs: set[str] = set()
    while isinstance(resolved.get("$ref"), str):
        ref = resolved.pop("$ref")
        if ref in seen_refs:
            break
        seen_refs.add(ref)
        target = resolve_ref(ref, root)
        if target is None:
            raise SchemaError(f"Unresolvable $ref: {ref}")
        identities.append(id(target))
        merged = {**target, **resolved}
        description = resolved.get("description") or target.get("description")
        if description is not None:
            merged["description"] = description
        resolved = merged
    return resolved, tuple(identities)


def _flatten_node(
    node: Any,
    *,
    prefix: str,
    root: Mapping[str, Any],
    entries: dict[str, SchemaEntry],
    ancestors: frozenset[int],
) -> None:
    if not isinstance(node, Mapping):
        return
    try:
        resolved, identities = _resolve_chain(node, root)
    except SchemaError as exc:
        _LOGGER.warning("Skipping schema subtree at '%s': %s", prefix or "<root>", exc)
        return
    if ancestors.intersection(identities):
        return
    ancestors = ancestors.union(identities)

    pattern_properties = resolved.get("patternProperties")
    if isinstance(pattern_properties, Mapping):
        wildcard_path = f"{prefix}/*" if prefix else "*"
        for pattern, value in pattern_properties.items():
            value_node = _resolve_child(value, root, wildcard_path)
            if value_node is None:
                continue
            entries[wildcard_path] = _pattern_entry(pattern, value_node)
            _flatten_node(
                value, prefix=wildcard_path, root=root, entries=entries, ancestors=ancestors
            )

    one_of = resolved.get("oneOf")
    if isinstance(one_of, list):
        # Not consulted by position lookups; kept for direct access to alternatives.
        for index, alternative in enumerate(one_of):
            _flatten_node(
                alternative,
                prefix=f"{prefix}#{index}",
                root=root,
                entries=entries,
                ancestors=ancestors,
            )

    properties = resolved.get("properties")
    if isinstance(properties, Mapping):
        for key, value in properties.items():
            child_path = f"{prefix}/{key}" if prefix else key
            child_node = _resolve_child(value, root, child_path)
            if child_node is None:
                continue
            entries[child_path] = _value_entry(child_node)
            _flatten_node(value, prefix=child_path, root=root, entries=entries, ancestors=ancestors)
    elif prefix and "patternProperties" not in resolved:
        existing = entries.get(prefix)
        entries[prefix] = _value_entry(resolved, pattern=existing.pattern if existing else None)

    definitions = resolved.get("$defs")
    if isinstance(definitions, Mapping):
        for key, value in definitions.items():
            _flatten_node(
                value, prefix=f"$defs/{key}", root=root, entries=entries, ancestors=ancestors
            )


def _resolve_child(value: Any, root: Mapping[str, Any], path: str) -> Mapping[str, Any] | None:
    if not isinstance(value, Mapping):
        return {}
    try:
        return resolve_node(value, root)
    except SchemaError as exc:
        _LOGGER.warning("Skipping schema subtree at '%s': %s", path, exc)
        return None


def _value_entry(node: Mapping[str, Any], pattern: str | None = None) -> SchemaEntry:
    return SchemaEntry(
        description=node.get("description") or "",
        schema_type=_schema_type(node),
        enum=tuple(node.get("enum") or ()),
        examples=tuple(node.get("examples") or ()),
        default=node.get("default"),
        has_default="default" in node,
        one_of=tuple(node.get("oneOf") or ()),
        pattern=pattern,
        additional_properties=node.get("additionalProperties"),
    )


def _pattern_entry(pattern: str, node: Mapping[str, Any]) -> SchemaEntry:
    return SchemaEntry(
        description=node.get("description") or "",
        schema_type=_schema_type(node),
        one_of=tuple(node.get("oneOf") or ()),
        pattern=pattern,
        additional_properties=node.get("additionalProperties"),
    )


def _schema_type(node: Mapping[str, Any]) -> str | tuple[str, ...]:
    node_type = node.get("type")
    if isinstance(node_type, list):
        return tuple(str(item) for item in node_type)
    if isinstance(node_type, str):
        return node_type
    return ""


def _child_schema(node: Any, segment: str, root: Mapping[str, Any]) -> Any:
    if not isinstance(node, Mapping):
        return None
    child = _lookup_child(node, segment)
    if child is not None or not isinstance(node.get("$ref"), str):
        return child
    try:
        return _lookup_child(resolve_node(node, root), segment)
    except SchemaError as exc:
        _LOGGER.debug("Cannot resolve $ref while looking up '%s': %s", segment, exc)
        return None


def _lookup_child(node: Mapping[str, Any], segment: str) -> Any:
    properties = node.get("properties")
    if isinstance(properties, Mapping) and properties.get(segment) is not None:
        return properties[segment]
    pattern_properties = node.get("patternProperties")
    if isinstance(pattern_properties, Mapping):
        for pattern, value in pattern_properties.items():
            try:
                if re.search(pattern, segment):
                    return value
            except re.error:
                _LOGGER.debug("Ignoring invalid patternProperties regex: %s", pattern)
    return None
