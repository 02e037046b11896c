"""Step nodes and their doc string argument."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from featuremodel.models import _fragments
from featuremodel.models.base import Keyworded, Model, NodeKind, build_model
from featuremodel.models.capabilities import Containing, Textual

if TYPE_CHECKING:
    from featuremodel.models.table import Table
    from featuremodel.parsing import DialectKeywords, Record


class DocString(Textual, Model):
    """A step's multi-line string argument.

    Attributes:
        content: The string, with the delimiter indentation removed.
        content_type: Optional marker written after the opening delimiter.
    """

    kind = NodeKind.DOC_STRING
    text_attribute = "content"

    def __init__(self) -> None:
        super().__init__()
        self.content = ""
        self.content_type = ""

    def _populate(self, record: Record) -> None:
        super()._populate(record)
        self.content = record.text
        self.content_type = record.content_type

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return _fragments.in_step(source_text, keywords)

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        return _fragments.first_block(document)


Block = Union["Table", DocString]


class Step(Textual, Keyworded, Containing, Model):
    """One action line of a background or test.

    Attributes:
        keyword: Step keyword as written ("Given", "And", "*").
        text: Text after the keyword.
        block: Attached Table or DocString, if any.
    """

    kind = NodeKind.STEP

    def __init__(self) -> None:
        super().__init__()
        self.text = ""
        self.block: Block | None = None

    def _populate(self, record: Record) -> None:
        super()._populate(record)
        self.text = record.text
        if record.block is not None:
            self.block = self._adopt(build_model(record.block))

    def children(self) -> list[Model]:
        return [self.block] if self.block is not None else []

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return _fragments.in_scenario(source_text, keywords)

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        return _fragments.first_step(document)

    def __repr__(self) -> str:
        return f"<Step {self.keyword} {self.text!r}>"
