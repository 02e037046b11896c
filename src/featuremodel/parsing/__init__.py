"""Parsing adapter - the boundary to the gherkin parser.

Source text goes in, a normalized ``Record`` tree comes out. Dialects
are opaque keys forwarded to the parser's token matcher.

Exports:
- parse_text: Parse a document into a document Record
- dialect_keywords: Primary section keywords of a dialect
- get_dialect / set_dialect / configure: Module default dialect
- stand_alone_file_name: Synthetic file name for a fragment of some kind
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from gherkin.dialect import Dialect
from gherkin.errors import ParserError
from gherkin.parser import Parser
from gherkin.token_matcher import TokenMatcher
from gherkin.token_scanner import TokenScanner

from featuremodel.config import DEFAULT_CONFIG
from featuremodel.errors import ParseError
from featuremodel.parsing.records import RawData, Record, SchemaVersion
from featuremodel.parsing.schema import detect_schema, normalize

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "featuremodel_source.feature"

_dialect: str = DEFAULT_CONFIG["parsing"]["dialect"]


def get_dialect() -> str:
    """Return the dialect used when none is passed explicitly."""
    return _dialect


def set_dialect(dialect: str) -> None:
    """Change the dialect used when none is passed explicitly."""
    global _dialect
    _dialect = dialect


def configure(config: dict[str, Any]) -> None:
    """Apply the ``[parsing]`` section of a loaded configuration."""
    set_dialect(config.get("parsing", {}).get("dialect", DEFAULT_CONFIG["parsing"]["dialect"]))


@dataclass(frozen=True)
class DialectKeywords:
    """First-listed keyword of each section type in a dialect."""

    feature: str
    background: str
    scenario: str
    outline: str
    examples: str
    rule: str


def dialect_keywords(dialect: str | None = None) -> DialectKeywords:
    """Look up the section keywords of a dialect.

    Raises:
        ValueError: If the dialect is not known to the parser.
    """
    name = dialect or get_dialect()
    language = Dialect.for_name(name)
    if language is None:
        raise ValueError(f"Unknown dialect: {name!r}")

    def first(keywords: list[str]) -> str:
        return next((k.strip() for k in keywords if k.strip() != "*"), keywords[0].strip())

    return DialectKeywords(
        feature=first(language.feature_keywords),
        background=first(language.background_keywords),
        scenario=first(language.scenario_keywords),
        outline=first(language.scenario_outline_keywords),
        examples=first(language.examples_keywords),
        rule=first(language.rule_keywords),
    )


def stand_alone_file_name(kind: str) -> str:
    """Synthetic file name used when parsing a fragment of ``kind``."""
    return f"featuremodel_stand_alone_{kind}.feature"


def parse_text(source_text: str, file_name: str = DEFAULT_FILE_NAME, dialect: str | None = None) -> Record:
    """Parse source text into a normalized document Record.

    Args:
        source_text: Complete feature document text.
        file_name: Real or synthetic name reported in errors.
        dialect: Dialect key; defaults to ``get_dialect()``.

    Raises:
        ParseError: If the parser rejects the text.
    """
    name = dialect or get_dialect()
    logger.debug("Parsing %s with dialect %s", file_name, name)
    try:
        raw = Parser().parse(TokenScanner(source_text), TokenMatcher(name))
    except ParserError as e:
        raise ParseError(file_name, str(e)) from e
    return normalize(raw)


__all__ = [
    "DEFAULT_FILE_NAME",
    "DialectKeywords",
    "RawData",
    "Record",
    "SchemaVersion",
    "configure",
    "detect_schema",
    "dialect_keywords",
    "get_dialect",
    "normalize",
    "parse_text",
    "set_dialect",
    "stand_alone_file_name",
]
