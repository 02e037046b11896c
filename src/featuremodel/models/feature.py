"""Feature and Rule nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from featuremodel.models import _fragments
from featuremodel.models.base import Keyworded, Model, NodeKind, build_model
from featuremodel.models.capabilities import Containing, Described, Named, Tagged

if TYPE_CHECKING:
    from featuremodel.models.sections import Background, Outline, Scenario
    from featuremodel.parsing import DialectKeywords, Record

Test = Union["Scenario", "Outline"]


class _TestContainer(Named, Described, Tagged, Containing, Keyworded, Model):
    """A titled node holding an optional background and a list of tests.

    Attributes:
        background: The shared setup section, if any.
        tests: Scenarios and outlines in source order.
    """

    def __init__(self) -> None:
        super().__init__()
        self.background: Background | None = None
        self.tests: list[Test] = []

    def _populate(self, record: Record) -> None:
        super()._populate(record)
        for child in record.children:
            if child.kind == NodeKind.BACKGROUND.value:
                self.background = self._adopt(build_model(child))
            elif child.kind in (NodeKind.SCENARIO.value, NodeKind.OUTLINE.value):
                self.tests.append(self._adopt(build_model(child)))

    @property
    def scenarios(self) -> list[Scenario]:
        return [test for test in self.tests if test.kind == NodeKind.SCENARIO]

    @property
    def outlines(self) -> list[Outline]:
        return [test for test in self.tests if test.kind == NodeKind.OUTLINE]

    def has_background(self) -> bool:
        return self.background is not None

    def children(self) -> list[Model]:
        sections: list[Model] = [self.background] if self.background is not None else []
        return [*self.tags, *sections, *self.tests]


class Rule(_TestContainer):
    """A business rule grouping tests within a feature."""

    kind = NodeKind.RULE

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return _fragments.in_feature(source_text, keywords)

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        return _fragments.first_section(document)


class Feature(_TestContainer):
    """The top-level node of a feature document.

    Attributes:
        language: Dialect the feature was parsed in, when the parser
            reports it.
        rules: Rules in source order, after the feature's own tests.
    """

    kind = NodeKind.FEATURE

    def __init__(self) -> None:
        super().__init__()
        self.language = ""
        self.rules: list[Rule] = []

    def _populate(self, record: Record) -> None:
        super()._populate(record)
        self.language = record.language
        self.rules = [
            self._adopt(build_model(child)) for child in record.children if child.kind == NodeKind.RULE.value
        ]

    def test_count(self) -> int:
        """Number of tests, including those inside rules."""
        return len(self.tests) + sum(len(rule.tests) for rule in self.rules)

    def children(self) -> list[Model]:
        return [*super().children(), *self.rules]

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        return _fragments.feature_of(document)
