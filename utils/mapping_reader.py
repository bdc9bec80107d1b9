# utils/mapping_reader.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Property mapping loader for JSON files and NAME=TYPE pairs

import json
from pathlib import Path
from typing import Dict, Iterable, Mapping

from model.property_types import PropertyType
from utils.logger import get_logger


class MappingFormatError(Exception):
    """Exception raised when a property mapping is malformed."""

    pass


def read_property_mapping(filepath: str) -> Dict[str, PropertyType]:
    """Read a property mapping from a JSON file.

    Expected JSON format (an object of property name to type tag):
        {
            "Assignee": "person",
            "Tasks": "relation",
            "Task ID": "id"
        }

    Args:
        filepath: Path to the JSON mapping file

    Returns:
        Mapping of property name to PropertyType

    Raises:
        MappingFormatError: If the file is missing, is not valid JSON or
            contains an unknown type tag
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise MappingFormatError(f"Mapping file not found: {filepath}")

    logger.debug(f"Reading property mapping: {filepath}")

    try:
        with open(path, "r", encoding="utf-8") as file:
            data = json.load(file)
    except json.JSONDecodeError as e:
        raise MappingFormatError(f"Invalid JSON in mapping file: {e}")
    except OSError as e:
        raise MappingFormatError(f"Cannot open mapping file: {e}")

    if not isinstance(data, dict):
        raise MappingFormatError("Mapping file must contain a JSON object")

    mapping = validate_mapping(data)
    logger.debug(f"Loaded {len(mapping)} property types")
    return mapping


def parse_mapping_pairs(pairs: Iterable[str]) -> Dict[str, PropertyType]:
    """Parse ``NAME=TYPE`` pairs, as given on the command line.

    The name is everything before the last ``=`` so that property names
    may themselves contain ``=``.

    Args:
        pairs: Strings like ``'Assignee=person'``

    Returns:
        Mapping of property name to PropertyType, later pairs winning

    Raises:
        MappingFormatError: If a pair has no ``=``, an empty name or an
            unknown type tag
    """
    raw: Dict[str, str] = {}
    for pair in pairs:
        name, sep, tag = pair.rpartition("=")
        if not sep or not name:
            raise MappingFormatError(f"Invalid property type pair: {pair!r} (expected NAME=TYPE)")
        raw[name] = tag.strip()
    return validate_mapping(raw)


def validate_mapping(data: Mapping[str, object]) -> Dict[str, PropertyType]:
    """Coerce every tag in a raw mapping to a PropertyType.

    Raises:
        MappingFormatError: If a name is not a string or a tag is unknown
    """
    mapping: Dict[str, PropertyType] = {}
    for name, tag in data.items():
        if not isinstance(name, str):
            raise MappingFormatError(f"Property name must be text: {name!r}")
        if not isinstance(tag, (str, PropertyType)):
            raise MappingFormatError(f"Property type for {name!r} must be text, got {tag!r}")
        try:
            mapping[name] = PropertyType.from_tag(tag)
        except ValueError as e:
            raise MappingFormatError(f"{e} for property {name!r}")
    return mapping
