"""Text position exports."""

from .position_models import FALLBACK_LOCATION, Location, Position, TextRange
from .structural_paths import (
    WILDCARD,
    key_at_line,
    location_of_path,
    path_at_position,
    possible_paths,
    word_range_at,
)

__all__ = [
    "FALLBACK_LOCATION",
    "Location",
    "Position",
    "TextRange",
    "WILDCARD",
    "key_at_line",
    "location_of_path",
    "path_at_position",
    "possible_paths",
    "word_range_at",
]
