"""Helpers for parsing stand-alone fragments.

The parser only accepts whole documents, so a fragment such as a single
step or row is embedded in a minimal synthetic document and its record
is picked back out afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from featuremodel.parsing import DialectKeywords, Record

FAKE_FEATURE_NAME = "Fake feature to parse"


def in_feature(source_text: str, keywords: DialectKeywords) -> str:
    return f"{keywords.feature}: {FAKE_FEATURE_NAME}\n{source_text}"


def in_scenario(source_text: str, keywords: DialectKeywords) -> str:
    return in_feature(f"{keywords.scenario}:\n{source_text}", keywords)


def in_step(source_text: str, keywords: DialectKeywords) -> str:
    return in_scenario(f"* fake step\n{source_text}", keywords)


def in_outline(source_text: str, keywords: DialectKeywords) -> str:
    return in_feature(f"{keywords.outline}:\n* fake step\n{source_text}", keywords)


def feature_of(document: Record) -> Record | None:
    return document.first_child("feature")


def first_section(document: Record) -> Record | None:
    feature = feature_of(document)
    if feature is None or not feature.children:
        return None
    return feature.children[0]


def first_step(document: Record) -> Record | None:
    section = first_section(document)
    if section is None or not section.steps:
        return None
    return section.steps[0]


def first_block(document: Record) -> Record | None:
    step = first_step(document)
    return step.block if step is not None else None
