"""Capability interfaces.

Each interface is a small mixin describing one thing a node can do. Node
classes inherit the ones they implement; equality and traversal work in
terms of these interfaces rather than concrete node kinds.

The mixins are cooperative: ``__init__`` sets an empty default and
``_populate`` fills the attribute from a normalized Record, each passing
control along the MRO to ``Model``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from featuremodel.models.base import build_model

if TYPE_CHECKING:
    from featuremodel.models.table import Row
    from featuremodel.models.tag import Tag
    from featuremodel.models.steps import Step
    from featuremodel.parsing import Record


def trim_description(text: str) -> str:
    """Normalize a raw description block.

    Blank lines at either end are dropped, then the indentation shared by
    all non-blank lines is removed. Indentation beyond that minimum is
    kept, as are trailing spaces; whitespace-only lines become empty.

    >>> trim_description("  \\n   A\\n\\n  B  ")
    ' A\\n\\nB  '
    """
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return ""

    indent = min(len(line) - len(line.lstrip()) for line in lines if line.strip())
    return "\n".join(line[indent:] if line.strip() else "" for line in lines)


class Named:
    """Has a single-line title."""

    def __init__(self) -> None:
        super().__init__()
        self.name: str = ""

    def _populate(self, record: Record) -> None:
        super()._populate(record)  # type: ignore[misc]
        self.name = record.name


class Described:
    """Has multi-line free text, trimmed when parsed."""

    def __init__(self) -> None:
        super().__init__()
        self.description: str = ""

    def _populate(self, record: Record) -> None:
        super()._populate(record)  # type: ignore[misc]
        self.description = trim_description(record.description)


class Tagged:
    """Carries an ordered list of tags."""

    def __init__(self) -> None:
        super().__init__()
        self.tags: list[Tag] = []

    def _populate(self, record: Record) -> None:
        super()._populate(record)  # type: ignore[misc]
        self.tags = [self._adopt(build_model(tag)) for tag in record.tags]  # type: ignore[attr-defined]

    @property
    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags]

    @property
    def applied_tags(self) -> list[Tag]:
        """Tags inherited from tagged ancestors, outermost first."""
        inherited: list[Tag] = []
        for ancestor in self.ancestors():  # type: ignore[attr-defined]
            if isinstance(ancestor, Tagged):
                inherited = list(ancestor.tags) + inherited
        return inherited

    @property
    def all_tags(self) -> list[Tag]:
        return self.applied_tags + list(self.tags)


class Stepped:
    """Owns an ordered sequence of steps."""

    def __init__(self) -> None:
        super().__init__()
        self.steps: list[Step] = []

    def _populate(self, record: Record) -> None:
        super()._populate(record)  # type: ignore[misc]
        self.steps = [self._adopt(build_model(step)) for step in record.steps]  # type: ignore[attr-defined]


class TableHolder:
    """Owns a grid of rows."""

    def __init__(self) -> None:
        super().__init__()
        self.rows: list[Row] = []

    def _populate(self, record: Record) -> None:
        super()._populate(record)  # type: ignore[misc]
        self.rows = [self._adopt(build_model(row)) for row in record.rows]  # type: ignore[attr-defined]


class Containing:
    """Structure is defined by ``children()``.

    Every node can list its children for navigation; nodes declaring this
    interface are also compared by them.
    """


class Textual:
    """Identity is a single text value.

    Subclasses name the attribute holding it in ``text_attribute``.
    """

    text_attribute: str = "text"

    @property
    def text_value(self) -> Any:
        return getattr(self, self.text_attribute)
