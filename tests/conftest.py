# tests/conftest.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for the formula converter tests.

The configuration handles:
- Python path setup for module imports
- Test environment initialization
- Common fixtures for formulas and property mappings
"""

import sys
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify module availability before any test runs.

    Raises:
        pytest.skip: If required modules cannot be imported
    """
    try:
        import converter
        import model
        import syntax
        import utils
        from utils.logger import get_logger
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    # Bind the global logger to the session stderr, not a per-test capture
    get_logger()

    yield


@pytest.fixture
def property_mapping():
    """Provide a mapping that covers every property type.

    Returns:
        Dict[str, str]: Property name to type tag
    """
    return {
        "Owner": "person",
        "Tasks": "relation",
        "Hours": "rollup",
        "Task ID": "id",
        "Files": "file",
        "Tags": "multi-select",
        "Notes": "other",
    }


@pytest.fixture
def legacy_formula():
    """Provide a formula 1.0 expression touching several rewrite rules.

    Returns:
        str: Formula using a renamed function, a binary function and a constant
    """
    return 'if(larger(prop("Hours"), 2), slice(prop("Notes"), 0, 3), format(pi))'
