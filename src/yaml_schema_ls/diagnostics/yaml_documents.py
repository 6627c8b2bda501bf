"""YAML text parsing shared by validation and formatting."""

from __future__ import annotations

import re
from collections.abc import Hashable
from typing import Any

import yaml
from yaml.constructor import ConstructorError

_BOOL_TAG = "tag:yaml.org,2002:bool"
_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"

_CORE_BOOL = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")
_CORE_INT = re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$")
_CORE_FLOAT = re.compile(
    r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
    r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$"
)


class DocumentLoader(yaml.SafeLoader):  # pylint: disable=too-many-ancestors
    """Safe loader with YAML 1.2 core scalar typing.

    Only ``true``/``false`` are booleans, integers are decimal, ``0o`` octal or
    ``0x`` hex, and dates stay plain strings. Scalar mapping keys are always
    strings, as in JSON.
    """

    def construct_mapping(
        self, node: yaml.MappingNode, deep: bool = False
    ) -> dict[Hashable, Any]:
        self.flatten_mapping(node)
        mapping: dict[Hashable, Any] = {}
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                key: Any = key_node.value
            else:
                key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                raise ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    "found unhashable key",
                    key_node.start_mark,
                )
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


def _construct_core_int(loader: DocumentLoader, node: yaml.ScalarNode) -> int:
    value = loader.construct_scalar(node)
    if value.startswith(("0o", "0x")):
        return int(value, 0)
    return int(value, 10)


DocumentLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in (_BOOL_TAG, _INT_TAG, _FLOAT_TAG, _TIMESTAMP_TAG)
    ]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
DocumentLoader.add_implicit_resolver(_BOOL_TAG, _CORE_BOOL, list("tTfF"))
DocumentLoader.add_implicit_resolver(_INT_TAG, _CORE_INT, list("-+0123456789"))
DocumentLoader.add_implicit_resolver(_FLOAT_TAG, _CORE_FLOAT, list("-+0123456789."))
DocumentLoader.add_constructor(_INT_TAG, _construct_core_int)


def parse_yaml(text: str) -> Any:
    """Parse one YAML document.

    Raises:
      yaml.YAMLError: If the text is not valid YAML.
    """
    return yaml.load(text, Loader=DocumentLoader)


def problem_position(exc: yaml.YAMLError) -> tuple[int, int] | None:
    """Return the 1-based ``(line, column)`` a parser error points at, if any."""
    mark = getattr(exc, "problem_mark", None) or getattr(exc, "context_mark", None)
    if mark is None:
        return None
    return mark.line + 1, mark.column + 1


def problem_message(exc: yaml.YAMLError) -> str:
    """Return the parser's message without the source excerpt."""
    if isinstance(exc, yaml.MarkedYAMLError):
        parts = [part for part in (exc.context, exc.problem) if part]
        if parts:
            return ": ".join(parts)
    return str(exc)
