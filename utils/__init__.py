# utils/__init__.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Utility module exports

from .mapping_reader import (
    read_property_mapping,
    parse_mapping_pairs,
    validate_mapping,
    MappingFormatError,
)

__all__ = [
    "read_property_mapping",
    "parse_mapping_pairs",
    "validate_mapping",
    "MappingFormatError",
]
