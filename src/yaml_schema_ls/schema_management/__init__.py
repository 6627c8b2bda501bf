"""Schema management exports."""

from .schema_loading import (
    LoadedSchema,
    SchemaLoadError,
    ValidatorCache,
    build_loaded_schema,
    compile_validator,
    load_schema,
    parse_schema_text,
)
from .schema_models import SchemaEntry, SchemaIndex, display_value
from .schema_projection import (
    SchemaError,
    flatten_schema,
    resolve_node,
    resolve_ref,
    schema_at_path,
)

__all__ = [
    "LoadedSchema",
    "SchemaEntry",
    "SchemaError",
    "SchemaIndex",
    "SchemaLoadError",
    "ValidatorCache",
    "build_loaded_schema",
    "compile_validator",
    "display_value",
    "flatten_schema",
    "load_schema",
    "parse_schema_text",
    "resolve_node",
    "resolve_ref",
    "schema_at_path",
]
