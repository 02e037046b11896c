"""Tests for normalization of the parser's schema versions."""

import pytest

from featuremodel.models import Feature, build_model
from featuremodel.parsing import SchemaVersion, detect_schema, normalize

LEGACY = [
    {
        "keyword": "Feature",
        "name": "Legacy",
        "line": 2,
        "description": "",
        "tags": [{"name": "@old", "line": 1}],
        "comments": [{"value": "# top", "line": 1}],
        "elements": [
            {
                "keyword": "Background",
                "name": "",
                "line": 4,
                "description": "",
                "type": "background",
                "steps": [{"keyword": "Given ", "name": "setup", "line": 5}],
            },
            {
                "keyword": "Scenario Outline",
                "name": "Templated",
                "line": 7,
                "description": "",
                "type": "scenario_outline",
                "steps": [
                    {
                        "keyword": "When ",
                        "name": "a <param> step",
                        "line": 8,
                        "rows": [{"cells": ["a", "b"], "line": 9}],
                    },
                    {
                        "keyword": "Then ",
                        "name": "text",
                        "line": 10,
                        "doc_string": {"value": "doc", "content_type": "md", "line": 11},
                    },
                ],
                "examples": [
                    {
                        "keyword": "Examples",
                        "name": "",
                        "line": 15,
                        "description": "",
                        "rows": [{"cells": ["param"], "line": 16}, {"cells": ["value"], "line": 17}],
                    }
                ],
            },
        ],
    }
]

TYPED = {
    "type": "GherkinDocument",
    "feature": {
        "type": "Feature",
        "tags": [{"type": "Tag", "location": {"line": 1, "column": 1}, "name": "@old"}],
        "location": {"line": 2, "column": 1},
        "language": "en",
        "keyword": "Feature",
        "name": "Legacy",
        "children": [
            {
                "type": "Background",
                "location": {"line": 4, "column": 3},
                "keyword": "Background",
                "name": "",
                "steps": [
                    {"type": "Step", "location": {"line": 5, "column": 5}, "keyword": "Given ", "text": "setup"}
                ],
            },
            {
                "type": "ScenarioOutline",
                "tags": [],
                "location": {"line": 7, "column": 3},
                "keyword": "Scenario Outline",
                "name": "Templated",
                "steps": [
                    {
                        "type": "Step",
                        "location": {"line": 8, "column": 5},
                        "keyword": "When ",
                        "text": "a <param> step",
                        "argument": {
                            "type": "DataTable",
                            "location": {"line": 9, "column": 7},
                            "rows": [
                                {
                                    "type": "TableRow",
                                    "location": {"line": 9, "column": 7},
                                    "cells": [
                                        {"type": "TableCell", "location": {"line": 9, "column": 9}, "value": "a"},
                                        {"type": "TableCell", "location": {"line": 9, "column": 13}, "value": "b"},
                                    ],
                                }
                            ],
                        },
                    },
                    {
                        "type": "Step",
                        "location": {"line": 10, "column": 5},
                        "keyword": "Then ",
                        "text": "text",
                        "argument": {
                            "type": "DocString",
                            "location": {"line": 11, "column": 7},
                            "contentType": "md",
                            "content": "doc",
                        },
                    },
                ],
                "examples": [
                    {
                        "type": "Examples",
                        "tags": [],
                        "location": {"line": 15, "column": 5},
                        "keyword": "Examples",
                        "name": "",
                        "tableHeader": {
                            "type": "TableRow",
                            "location": {"line": 16, "column": 7},
                            "cells": [{"type": "TableCell", "location": {"line": 16, "column": 9}, "value": "param"}],
                        },
                        "tableBody": [
                            {
                                "type": "TableRow",
                                "location": {"line": 17, "column": 7},
                                "cells": [
                                    {"type": "TableCell", "location": {"line": 17, "column": 9}, "value": "value"}
                                ],
                            }
                        ],
                    }
                ],
            },
        ],
    },
    "comments": [{"type": "Comment", "location": {"line": 1, "column": 1}, "text": "# top"}],
}

CURRENT = {
    "feature": {
        "tags": [{"location": {"line": 1, "column": 1}, "name": "@old", "id": "0"}],
        "location": {"line": 2, "column": 1},
        "language": "en",
        "keyword": "Feature",
        "name": "Legacy",
        "description": "",
        "children": [
            {
                "background": {
                    "location": {"line": 4, "column": 3},
                    "keyword": "Background",
                    "name": "",
                    "description": "",
                    "steps": [
                        {
                            "location": {"line": 5, "column": 5},
                            "keyword": "Given ",
                            "keywordType": "Context",
                            "text": "setup",
                            "id": "1",
                        }
                    ],
                    "id": "2",
                }
            },
            {
                "scenario": {
                    "tags": [],
                    "location": {"line": 7, "column": 3},
                    "keyword": "Scenario Outline",
                    "name": "Templated",
                    "description": "",
                    "steps": [
                        {
                            "location": {"line": 8, "column": 5},
                            "keyword": "When ",
                            "text": "a <param> step",
                            "dataTable": {
                                "location": {"line": 9, "column": 7},
                                "rows": [
                                    {
                                        "location": {"line": 9, "column": 7},
                                        "cells": [
                                            {"location": {"line": 9, "column": 9}, "value": "a"},
                                            {"location": {"line": 9, "column": 13}, "value": "b"},
                                        ],
                                        "id": "3",
                                    }
                                ],
                            },
                            "id": "4",
                        },
                        {
                            "location": {"line": 10, "column": 5},
                            "keyword": "Then ",
                            "text": "text",
                            "docString": {
                                "location": {"line": 11, "column": 7},
                                "content": "doc",
                                "delimiter": '"""',
                                "mediaType": "md",
                            },
                            "id": "5",
                        },
                    ],
                    "examples": [
                        {
                            "tags": [],
                            "location": {"line": 15, "column": 5},
                            "keyword": "Examples",
                            "name": "",
                            "description": "",
                            "tableHeader": {
                                "location": {"line": 16, "column": 7},
                                "cells": [{"location": {"line": 16, "column": 9}, "value": "param"}],
                                "id": "6",
                            },
                            "tableBody": [
                                {
                                    "location": {"line": 17, "column": 7},
                                    "cells": [{"location": {"line": 17, "column": 9}, "value": "value"}],
                                    "id": "7",
                                }
                            ],
                            "id": "8",
                        }
                    ],
                    "id": "9",
                }
            },
        ],
    },
    "comments": [{"location": {"line": 1, "column": 1}, "text": "# top"}],
}

EXPECTED_TEXT = """\
@old
Feature: Legacy

Background:
  Given setup

Scenario Outline: Templated
  When a <param> step
    | a | b |
  Then text
    \"\"\"md
    doc
    \"\"\"

Examples:
  | param |
  | value |"""


class TestDetectSchema:
    """Tests for detect_schema()."""

    def test_legacy_list(self):
        assert detect_schema(LEGACY) is SchemaVersion.LEGACY_JSON

    def test_legacy_single_feature(self):
        assert detect_schema(LEGACY[0]) is SchemaVersion.LEGACY_JSON

    def test_typed_document(self):
        assert detect_schema(TYPED) is SchemaVersion.TYPED_AST

    def test_typed_bare_feature(self):
        assert detect_schema(TYPED["feature"]) is SchemaVersion.TYPED_AST

    def test_current(self):
        assert detect_schema(CURRENT) is SchemaVersion.CURRENT_AST

    def test_unsupported(self):
        """Anything that is not a dict or list is rejected."""
        with pytest.raises(TypeError):
            detect_schema("Feature: text")


@pytest.mark.parametrize("raw", [LEGACY, TYPED, CURRENT], ids=["legacy", "typed", "current"])
class TestNormalize:
    """Every schema version normalizes to the same record shape."""

    def test_feature_record(self, raw):
        feature = normalize(raw).first_child("feature")

        assert feature.kind == "feature"
        assert feature.line == 2
        assert feature.keyword == "Feature"
        assert feature.name == "Legacy"
        assert [tag.name for tag in feature.tags] == ["@old"]
        assert [child.kind for child in feature.children] == ["background", "outline"]

    def test_step_blocks(self, raw):
        outline = normalize(raw).first_child("feature").children[1]
        table_step, doc_step = outline.steps

        assert table_step.keyword == "When"
        assert table_step.block.kind == "table"
        assert [cell.text for cell in table_step.block.rows[0].cells] == ["a", "b"]
        assert doc_step.block.kind == "doc_string"
        assert doc_step.block.text == "doc"
        assert doc_step.block.content_type == "md"

    def test_example_rows(self, raw):
        outline = normalize(raw).first_child("feature").children[1]
        example = outline.examples[0]

        assert example.line == 15
        assert [[cell.text for cell in row.cells] for row in example.rows] == [["param"], ["value"]]

    def test_comments(self, raw):
        document = normalize(raw)

        assert [comment.text for comment in document.comments] == ["# top"]

    def test_raw_capsule_records_schema(self, raw):
        document = normalize(raw)
        feature = document.first_child("feature")

        assert feature.raw.schema is detect_schema(raw)
        assert feature.raw.data is not None

    def test_models_render_identically(self, raw):
        """Models built from any schema render the same text."""
        feature = build_model(normalize(raw).first_child("feature"))

        assert isinstance(feature, Feature)
        assert feature.to_text() == EXPECTED_TEXT


def current_document(*scenarios, language="en"):
    return {
        "feature": {
            "location": {"line": 1, "column": 1},
            "language": language,
            "keyword": "Feature",
            "name": "F",
            "description": "",
            "children": [{"scenario": scenario} for scenario in scenarios],
        },
        "comments": [],
    }


def current_scenario(keyword, examples=()):
    return {
        "location": {"line": 2, "column": 3},
        "keyword": keyword,
        "name": "",
        "description": "",
        "steps": [],
        "examples": list(examples),
    }


class TestOutlineDetection:
    """Untyped output marks outlines by examples or by keyword."""

    def test_outline_keyword_without_examples(self):
        document = normalize(current_document(current_scenario("Scenario Outline")))

        assert [child.kind for child in document.first_child("feature").children] == ["outline"]

    def test_alternative_outline_keyword(self):
        document = normalize(current_document(current_scenario("Scenario Template")))

        assert document.first_child("feature").children[0].kind == "outline"

    def test_scenario_keyword_without_examples(self):
        document = normalize(current_document(current_scenario("Scenario")))

        assert document.first_child("feature").children[0].kind == "scenario"

    def test_examples_make_an_outline(self):
        example = {"location": {"line": 4, "column": 5}, "keyword": "Examples", "name": "", "tableBody": []}
        document = normalize(current_document(current_scenario("Scenario", [example])))

        assert document.first_child("feature").children[0].kind == "outline"

    def test_outline_keyword_inside_rule(self):
        raw = current_document()
        raw["feature"]["children"] = [
            {
                "rule": {
                    "location": {"line": 2, "column": 3},
                    "keyword": "Rule",
                    "name": "R",
                    "description": "",
                    "children": [{"scenario": current_scenario("Scenario Outline")}],
                }
            }
        ]

        rule = normalize(raw).first_child("feature").children[0]

        assert rule.children[0].kind == "outline"
