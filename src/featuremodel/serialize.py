"""Serialization - Render feature document trees as canonical Gherkin text.

Every node kind has a renderer producing a list of lines; parents
indent and join their children's lines. The output parses back into an
equal tree and re-renders byte-identically.

Layout rules:
- Tags sit on one line directly above the title line they annotate.
- A description is preceded by one blank line, and followed by one when
  steps or rows come after it.
- Titled child sections are preceded by exactly one blank line and start
  at column 0.
- Steps are indented one level under their section, step arguments one
  level further. Example rows are indented one level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Sequence

from featuremodel.models.base import NodeKind
from featuremodel.parsing import dialect_keywords

if TYPE_CHECKING:
    from featuremodel.models import (
        Background,
        Cell,
        Comment,
        Directory,
        DocString,
        Example,
        Feature,
        FeatureFile,
        Model,
        Outline,
        Row,
        Rule,
        Scenario,
        Step,
        Table,
        Tag,
    )

INDENT = "  "
DOC_STRING_DELIMITER = '"""'
ALTERNATE_DOC_STRING_DELIMITER = "```"
STEP_KEYWORD = "*"
DEFAULT_LANGUAGE = "en"


def escape_cell(value: str) -> str:
    """Escape a cell value for output between pipes."""
    return value.replace("\\", "\\\\").replace("|", "\\|").replace("\n", "\\n")


def indent(lines: Sequence[str], depth: int = 1) -> list[str]:
    """Indent non-empty lines by ``depth`` levels."""
    prefix = INDENT * depth
    return [prefix + line if line else line for line in lines]


def column_widths(grid: Sequence[Sequence[str]]) -> list[int]:
    """Widest entry of each column; rows may be ragged."""
    widths: list[int] = []
    for cells in grid:
        for index, cell in enumerate(cells):
            if index < len(widths):
                widths[index] = max(widths[index], len(cell))
            else:
                widths.append(len(cell))
    return widths


def format_table(rows: Sequence[Row]) -> list[str]:
    """Render rows as aligned table lines.

    Cells are escaped first, so column widths count the escaped text.
    """
    grid = [[escape_cell(cell.value) for cell in row.cells] for row in rows]
    widths = column_widths(grid)
    lines = []
    for cells in grid:
        padded = [cell.ljust(widths[index]) for index, cell in enumerate(cells)]
        lines.append(f"| {' | '.join(padded)} |")
    return lines


def title_line(keyword: str, name: str) -> str:
    """``Keyword: Name``, or ``Keyword:`` when there is no name."""
    return f"{keyword}: {name}" if name else f"{keyword}:"


# DialectKeywords field supplying the keyword of a node built without one.
_KEYWORD_FIELDS = {
    NodeKind.FEATURE: "feature",
    NodeKind.BACKGROUND: "background",
    NodeKind.SCENARIO: "scenario",
    NodeKind.OUTLINE: "outline",
    NodeKind.EXAMPLE: "examples",
    NodeKind.RULE: "rule",
}


def keyword_of(node: Model) -> str:
    """The node's keyword, or its kind's default when it has none.

    Steps default to ``*``. Sections use the first keyword of their
    feature's language, or of the default dialect outside a feature.
    """
    keyword = node.keyword  # type: ignore[attr-defined]
    if keyword:
        return keyword
    if node.kind is NodeKind.STEP:
        return STEP_KEYWORD
    feature = node if node.kind is NodeKind.FEATURE else node.get_ancestor(NodeKind.FEATURE)
    language = getattr(feature, "language", "") or None
    return getattr(dialect_keywords(language), _KEYWORD_FIELDS[node.kind])


def _section(node: Model, body: list[str], sections: Sequence[Model] = ()) -> list[str]:
    """Lay out a titled node: tags, title, description, body, sections."""
    lines = []
    tags = getattr(node, "tags", None)
    if tags:
        lines.append(" ".join(tag.name for tag in tags))
    lines.append(title_line(keyword_of(node), node.name))  # type: ignore[attr-defined]

    description = node.description  # type: ignore[attr-defined]
    if description:
        lines.extend(["", *description.split("\n")])
        if body:
            lines.append("")
    lines.extend(body)

    for section in sections:
        lines.append("")
        lines.extend(render(section))
    return lines


def _steps_body(steps: Sequence[Step]) -> list[str]:
    body: list[str] = []
    for step in steps:
        body.extend(indent(render(step)))
    return body


def _render_cell(cell: Cell) -> list[str]:
    return [escape_cell(cell.value)]


def _render_row(row: Row) -> list[str]:
    return format_table([row])


def _render_table(table: Table) -> list[str]:
    return format_table(table.rows)


def _render_tag(tag: Tag) -> list[str]:
    return [tag.name]


def _render_comment(comment: Comment) -> list[str]:
    return [comment.text]


def escape_delimiter(delimiter: str) -> str:
    """The escaped form the parser turns back into ``delimiter``."""
    return "".join(f"\\{char}" for char in delimiter)


def doc_string_delimiter(content: str) -> str:
    """Triple quotes, unless the content literally holds their escaped form."""
    if escape_delimiter(DOC_STRING_DELIMITER) in content:
        return ALTERNATE_DOC_STRING_DELIMITER
    return DOC_STRING_DELIMITER


def _render_doc_string(doc_string: DocString) -> list[str]:
    delimiter = doc_string_delimiter(doc_string.content)
    content = doc_string.content.replace(delimiter, escape_delimiter(delimiter))
    return [
        f"{delimiter}{doc_string.content_type}",
        *(content.split("\n") if content else []),
        delimiter,
    ]


def _render_step(step: Step) -> list[str]:
    lines = [f"{keyword_of(step)} {step.text}"]
    if step.block is not None:
        lines.extend(indent(render(step.block)))
    return lines


def _render_background(background: Background) -> list[str]:
    return _section(background, _steps_body(background.steps))


def _render_scenario(scenario: Scenario) -> list[str]:
    return _section(scenario, _steps_body(scenario.steps))


def _render_outline(outline: Outline) -> list[str]:
    return _section(outline, _steps_body(outline.steps), outline.examples)


def _render_example(example: Example) -> list[str]:
    return _section(example, indent(format_table(example.rows)))


def _render_rule(rule: Rule) -> list[str]:
    sections: list[Model] = [rule.background] if rule.background is not None else []
    return _section(rule, [], [*sections, *rule.tests])


def _render_feature(feature: Feature) -> list[str]:
    sections: list[Model] = [feature.background] if feature.background is not None else []
    return _section(feature, [], [*sections, *feature.tests, *feature.rules])


def _render_feature_file(feature_file: FeatureFile) -> list[str]:
    feature = feature_file.feature
    if feature is None:
        return []
    lines = render(feature)
    if feature.language and feature.language != DEFAULT_LANGUAGE:
        lines.insert(0, f"# language: {feature.language}")
    return lines


def _render_directory(directory: Directory) -> list[str]:
    return [directory.path]


_RENDERERS: dict[NodeKind, Callable[..., list[str]]] = {
    NodeKind.CELL: _render_cell,
    NodeKind.ROW: _render_row,
    NodeKind.TABLE: _render_table,
    NodeKind.TAG: _render_tag,
    NodeKind.COMMENT: _render_comment,
    NodeKind.DOC_STRING: _render_doc_string,
    NodeKind.STEP: _render_step,
    NodeKind.BACKGROUND: _render_background,
    NodeKind.SCENARIO: _render_scenario,
    NodeKind.OUTLINE: _render_outline,
    NodeKind.EXAMPLE: _render_example,
    NodeKind.RULE: _render_rule,
    NodeKind.FEATURE: _render_feature,
    NodeKind.FEATURE_FILE: _render_feature_file,
    NodeKind.DIRECTORY: _render_directory,
}


def render(node: Model) -> list[str]:
    """Render a node as a list of lines, unindented."""
    return _RENDERERS[node.kind](node)


def to_text(node: Model) -> str:
    """Render a node as Gherkin text (no trailing newline)."""
    return "\n".join(render(node))
