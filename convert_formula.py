#!/usr/bin/env python3
# convert_formula.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Command-line interface for formula conversion with configurable logging levels

import sys
import json
import argparse
from pathlib import Path
from typing import Dict, Optional

from converter import convert_formula, describe_error, render_report
from model.property_types import PROPERTY_TYPES, PropertyType
from utils.logger import configure_logging, get_logger
from utils.mapping_reader import (
    MappingFormatError,
    parse_mapping_pairs,
    read_property_mapping,
)

EXIT_OK = 0
EXIT_CONVERSION_ERRORS = 1
EXIT_MAPPING_ERROR = 2
EXIT_INPUT_ERROR = 3
EXIT_INTERRUPTED = 4
EXIT_UNEXPECTED = 5


def read_formula_file(filepath: Path) -> str:
    """Read a formula from file.

    Args:
        filepath: Path to the formula file

    Returns:
        Formula text with surrounding whitespace removed

    Raises:
        FileNotFoundError: If formula file doesn't exist
        ValueError: If formula file cannot be read
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return f.read().strip()

    except FileNotFoundError:
        raise FileNotFoundError(f"Formula file not found: {filepath}")
    except OSError as e:
        raise ValueError(f"Error reading formula file: {e}")


def load_property_mapping(
    mapping_file: Optional[Path], pairs: Optional[list]
) -> Dict[str, PropertyType]:
    """Build the property mapping from a JSON file and NAME=TYPE pairs.

    Pairs override entries read from the file.

    Raises:
        MappingFormatError: If the file or a pair is invalid
    """
    mapping: Dict[str, PropertyType] = {}
    if mapping_file is not None:
        mapping.update(read_property_mapping(str(mapping_file)))
    if pairs:
        mapping.update(parse_mapping_pairs(pairs))
    return mapping


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Convert Notion-style formula 1.0 expressions to formula 2.0",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python convert_formula.py -f 'add(1, 2)'
  python convert_formula.py -f 'prop("Owner")' -t Owner=person --explain
  python convert_formula.py -i formula.txt -m types.json --json
  echo 'slice("abc", 1, 2)' | python convert_formula.py

Mapping file format:
  A JSON object of property name to type, e.g.:

  types.json:
    {"Owner": "person", "Task ID": "id"}
        """,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument("-f", "--formula", help="Formula 1.0 text to convert")
    source.add_argument(
        "-i", "--input", type=Path, help="Path to a file containing the formula"
    )

    parser.add_argument(
        "-m", "--mapping", type=Path, help="Path to a JSON property type mapping"
    )

    parser.add_argument(
        "-t",
        "--type",
        action="append",
        metavar="NAME=TYPE",
        dest="types",
        help=f"Property type for one property (repeatable); TYPE is one of: {', '.join(PROPERTY_TYPES)}",
    )

    parser.add_argument(
        "--explain", action="store_true", help="Print the explanation of every change"
    )

    parser.add_argument(
        "--json", action="store_true", help="Print the full conversion result as JSON"
    )

    parser.add_argument(
        "--list-types", action="store_true", help="List the property types and exit"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the formula converter.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)
    logger = get_logger()

    if args.list_types:
        for property_type in PROPERTY_TYPES:
            print(property_type)
        return EXIT_OK

    try:
        mapping = load_property_mapping(args.mapping, args.types)
        logger.validation_result(True, f"Property mapping loaded ({len(mapping)} entries)")

        if args.formula is not None:
            formula = args.formula
        elif args.input is not None:
            formula = read_formula_file(args.input)
        else:
            formula = sys.stdin.read().strip()

        logger.info(f"📋 Formula loaded: {formula}")
        result = convert_formula(formula, mapping)

        if args.json:
            print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        else:
            print(result.formula)
            if args.explain:
                report = render_report(result, mapping)
                if report:
                    print()
                    print(report)

        untyped = [name for name in result.props_in_order if name not in mapping]
        if untyped:
            logger.info(
                f"Properties without a type (treated as other): {', '.join(untyped)}"
            )

        if result.errors:
            for error in result.errors:
                logger.warning(describe_error(error))
            return EXIT_CONVERSION_ERRORS

        return EXIT_OK

    except MappingFormatError as e:
        logger.validation_result(False, f"Property mapping error: {e}")
        return EXIT_MAPPING_ERROR

    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Formula file error: {e}")
        return EXIT_INPUT_ERROR

    except KeyboardInterrupt:
        logger.error("Conversion interrupted by user")
        return EXIT_INTERRUPTED

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    sys.exit(main())
