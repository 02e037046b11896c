"""Comment nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from featuremodel.models import _fragments
from featuremodel.models.base import Model, NodeKind
from featuremodel.models.capabilities import Textual

if TYPE_CHECKING:
    from featuremodel.parsing import DialectKeywords, Record


class Comment(Textual, Model):
    """A comment line skipped by the parser.

    Attributes:
        text: The comment, including its ``#``, without surrounding
            whitespace.
    """

    kind = NodeKind.COMMENT

    def __init__(self) -> None:
        super().__init__()
        self.text = ""

    def _populate(self, record: Record) -> None:
        super()._populate(record)
        self.text = record.text

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return f"{source_text}\n{_fragments.in_feature('', keywords)}"

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        return document.comments[0] if document.comments else None
