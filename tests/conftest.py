"""Shared pytest fixtures for featuremodel tests."""

from pathlib import Path

import pytest

from featuremodel import parsing
from featuremodel.config import DEFAULT_CONFIG, merge_configs

FEATURE_TEXT = """\
@feature_tag
Feature: A feature

  Feature description.

  Background: Setup
    Given a setup step

  @scenario_tag
  Scenario: First
    When a step
      | a | b |

  Scenario Outline: Second
    Then a <param> step
      \"\"\"
      doc
      \"\"\"

    Examples: First examples
      | param |
      | value |
"""


@pytest.fixture(autouse=True)
def restore_dialect():
    """Keep dialect changes made by a test from leaking into others."""
    original = parsing.get_dialect()
    yield
    parsing.set_dialect(original)


@pytest.fixture
def default_config():
    """A configuration built from defaults only."""
    return merge_configs(DEFAULT_CONFIG, {})


@pytest.fixture
def feature_text():
    """A document using every section kind."""
    return FEATURE_TEXT


@pytest.fixture
def write_feature(tmp_path):
    """Write a feature file under tmp_path and return its path."""

    def _write(relative: str, text: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
