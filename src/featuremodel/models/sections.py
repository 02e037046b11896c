"""Step-bearing sections: Background, Scenario, Outline and Example."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from featuremodel.errors import ModelError
from featuremodel.models import _fragments
from featuremodel.models.base import Keyworded, Model, NodeKind, build_model
from featuremodel.models.capabilities import Described, Named, Stepped, TableHolder, Tagged
from featuremodel.models.table import Row

if TYPE_CHECKING:
    from featuremodel.parsing import DialectKeywords, Record


class _Section(Keyworded, Model):
    """A keyword-titled block parsed as the first child of a feature."""

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return _fragments.in_feature(source_text, keywords)

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        return _fragments.first_section(document)


class Background(Named, Described, Stepped, _Section):
    """Steps shared by every test of a feature or rule."""

    kind = NodeKind.BACKGROUND

    def children(self) -> list[Model]:
        return list(self.steps)


class Scenario(Named, Described, Tagged, Stepped, _Section):
    """A single concrete test case."""

    kind = NodeKind.SCENARIO

    def children(self) -> list[Model]:
        return [*self.tags, *self.steps]


class Outline(Named, Described, Tagged, Stepped, _Section):
    """A templated test case, expanded by its examples.

    Attributes:
        examples: Example tables in source order.
    """

    kind = NodeKind.OUTLINE

    def __init__(self) -> None:
        super().__init__()
        self.examples: list[Example] = []

    def _populate(self, record: Record) -> None:
        super()._populate(record)
        self.examples = [self._adopt(build_model(example)) for example in record.examples]

    def children(self) -> list[Model]:
        return [*self.tags, *self.steps, *self.examples]


class Example(Named, Described, Tagged, TableHolder, Keyworded, Model):
    """A table of values bound to an outline.

    The first row is the parameter row naming the outline's variables;
    the rest are argument rows.
    """

    kind = NodeKind.EXAMPLE

    NO_PARAMETERS_MESSAGE = "Cannot add a row. No parameters have been set."

    @property
    def parameter_row(self) -> Row | None:
        return self.rows[0] if self.rows else None

    @property
    def argument_rows(self) -> list[Row]:
        return self.rows[1:]

    @property
    def parameters(self) -> list[str]:
        row = self.parameter_row
        return row.values if row is not None else []

    def _row_values(self, data: Any) -> list[str]:
        """Turn a mapping or sequence into trimmed cell strings.

        Mappings are matched to parameters by name (keys go through
        ``str``), sequences by position. The input is not modified.
        """
        if isinstance(data, Mapping):
            by_name = {str(key): value for key, value in data.items()}
            values = [by_name.get(parameter, "") for parameter in self.parameters]
        elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
            values = list(data)
        else:
            raise TypeError(f"A row must be a mapping or a sequence, not {type(data).__name__}")
        return [str(value).strip() for value in values]

    def add_row(self, data: Mapping[Any, Any] | Sequence[Any]) -> Row:
        """Append an argument row.

        Args:
            data: Values by parameter name, or in parameter order.

        Returns:
            The new, attached row.

        Raises:
            ModelError: If there is no parameter row yet.
            TypeError: If ``data`` is neither a mapping nor a sequence.
        """
        if not self.rows:
            raise ModelError(self.NO_PARAMETERS_MESSAGE)
        row = self._adopt(Row.from_values(self._row_values(data)))
        self.rows.append(row)
        return row

    def remove_row(self, data: Mapping[Any, Any] | Sequence[Any]) -> None:
        """Remove the first argument row holding the given values.

        Does nothing when no argument row matches. The parameter row is
        never removed.

        Raises:
            TypeError: If ``data`` is neither a mapping nor a sequence.
        """
        values = self._row_values(data)
        for index, row in enumerate(self.rows[1:], start=1):
            if row.values == values:
                self._disown(self.rows.pop(index))
                return

    def children(self) -> list[Model]:
        return [*self.tags, *self.rows]

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return _fragments.in_outline(source_text, keywords)

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        outline = _fragments.first_section(document)
        if outline is None or not outline.examples:
            return None
        return outline.examples[0]
