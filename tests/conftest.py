"""
Pytest configuration and fixtures for constraint-directive tests

This module provides shared fixtures for unit and integration tests.
"""
import json

import pytest

from constraint_directive.core.validators import CollectingReporter


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run queries through a graphql-core schema"
    )


# =======================
# REPORTER FIXTURES
# =======================

@pytest.fixture(scope="function")
def collecting_reporter() -> CollectingReporter:
    """
    Reporter that records every failure instead of raising

    Returns:
        Fresh CollectingReporter for a single test
    """
    return CollectingReporter()


# =======================
# FILE FIXTURES
# =======================

BOOK_FIELDS_YAML = """
fields:
  title:
    type: String!
    constraints:
      minLength: 3
      maxLength: 20
  isbn:
    type: String
    constraints:
      format: isbn
  price:
    type: Float
    constraints:
      positive: true
      max: 1000
  tags:
    type: "[String]"
    constraints:
      maxSize: 3
      exclude: [spam]
      matches:
        - format: alpha
  ratings:
    type: "[Int!]"
    constraints:
      exclude: ["0"]
  legacy:
    type: String
    enabled: false
    constraints:
      minLength: 100
"""


@pytest.fixture(scope="function")
def fields_yaml(tmp_path) -> str:
    """
    Write a field constraints YAML file for a book input

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to the YAML file
    """
    path = tmp_path / "fields.yaml"
    path.write_text(BOOK_FIELDS_YAML)
    return str(path)


@pytest.fixture(scope="function")
def write_json(tmp_path):
    """
    Factory writing a JSON document into the test's temp directory

    Returns:
        Callable taking (name, data) and returning the file path
    """
    def _write(name: str, data) -> str:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)

    return _write
