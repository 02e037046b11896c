"""Normalized parser records.

Every schema version the gherkin parser has produced is decoded into the
same Record shape, so model construction never needs to know which
parser release produced its input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SchemaVersion(Enum):
    """Known shapes of gherkin parser output."""

    LEGACY_JSON = "legacy_json"  # gherkin 2: lists of features with "elements"
    TYPED_AST = "typed_ast"  # gherkin 3-5: dicts with a "type" discriminator
    CURRENT_AST = "current_ast"  # gherkin 6+: untyped dicts, wrapped children


@dataclass(frozen=True)
class RawData:
    """Unprocessed parser output for a single node.

    Diagnostic only; nothing in equality or serialization reads it.

    Attributes:
        schema: Which parser schema produced ``data``.
        data: The record exactly as the parser returned it.
    """

    schema: SchemaVersion
    data: Any = None


@dataclass
class Record:
    """A parser node after schema normalization.

    Attributes:
        kind: Node kind, matching a NodeKind value ("feature", "step", ...).
        line: 1-based source line, when known.
        keyword: Keyword as written, without trailing colon or whitespace.
        name: Title text.
        description: Raw description text (not yet trimmed).
        text: Step text, cell value, comment text or doc string content.
        content_type: Doc string content type marker.
        language: Dialect the feature was written in.
        tags: Tag records.
        children: Sections of a feature or rule (background, tests, rules),
            or the feature of a document.
        steps: Step records.
        examples: Example records of an outline.
        rows: Row records of a table or example.
        cells: Cell records of a row.
        block: Table or doc string record attached to a step.
        comments: Comment records of a document.
        raw: The capsule holding the parser's own data for this node.
    """

    kind: str
    line: int | None = None
    keyword: str = ""
    name: str = ""
    description: str = ""
    text: str = ""
    content_type: str = ""
    language: str = ""
    tags: list[Record] = field(default_factory=list)
    children: list[Record] = field(default_factory=list)
    steps: list[Record] = field(default_factory=list)
    examples: list[Record] = field(default_factory=list)
    rows: list[Record] = field(default_factory=list)
    cells: list[Record] = field(default_factory=list)
    block: Record | None = None
    comments: list[Record] = field(default_factory=list)
    raw: RawData | None = field(default=None, repr=False)

    def first_child(self, *kinds: str) -> Record | None:
        """Return the first child record of one of ``kinds``."""
        for child in self.children:
            if child.kind in kinds:
                return child
        return None
