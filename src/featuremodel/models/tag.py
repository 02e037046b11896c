"""Tag nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from featuremodel.models import _fragments
from featuremodel.models.base import Model, NodeKind
from featuremodel.models.capabilities import Named

if TYPE_CHECKING:
    from featuremodel.parsing import DialectKeywords, Record


class Tag(Named, Model):
    """A label attached to a feature, rule, test or example.

    ``name`` includes the leading ``@``.
    """

    kind = NodeKind.TAG

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return f"{source_text}\n{_fragments.in_feature('', keywords)}"

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        feature = _fragments.feature_of(document)
        if feature is None or not feature.tags:
            return None
        return feature.tags[0]

    def __repr__(self) -> str:
        return f"<Tag {self.name!r}>"
