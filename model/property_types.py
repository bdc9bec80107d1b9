# model/property_types.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Semantic property types and caller-supplied property mappings

"""Property types used to decide how a ``prop("Name")`` reference is rewritten.

In formula 1.0 several property types evaluated to comma-separated text; in
2.0 they evaluate to lists or prefixed strings. The caller tells the
converter which type each referenced property has through a mapping from
property name to type tag. Names are case-sensitive and a missing entry
means ``other``.
"""

from __future__ import annotations
from enum import Enum
from typing import Mapping, Tuple, Union


class PropertyType(Enum):
    """Semantic type of a referenced property.

    Member order is the order in which type selectors present the choices.
    """

    PERSON = "person"
    RELATION = "relation"
    ROLLUP = "rollup"
    ID = "id"
    FILE = "file"
    MULTI_SELECT = "multi-select"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_tag(cls, tag: Union[str, "PropertyType"]) -> "PropertyType":
        """Coerce a tag string (or an existing member) to a PropertyType.

        Raises:
            ValueError: If the tag is not one of the seven legal tags
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise ValueError(
                f"Unknown property type '{tag}' (expected one of: {PROPERTY_TYPES_STRING})"
            ) from None


PropertyMapping = Mapping[str, Union[PropertyType, str]]

PROPERTY_TYPES: Tuple[str, ...] = tuple(t.value for t in PropertyType)

PROPERTY_TYPES_WITH_CHANGES: Tuple[str, ...] = tuple(
    t.value for t in PropertyType if t is not PropertyType.OTHER
)

PROPERTY_TYPES_STRING = ", ".join(PROPERTY_TYPES)


def resolve_property_type(name: str, mapping: PropertyMapping | None) -> PropertyType:
    """Look up the semantic type for a property name, defaulting to ``other``."""
    if not mapping or name not in mapping:
        return PropertyType.OTHER
    return PropertyType.from_tag(mapping[name])
