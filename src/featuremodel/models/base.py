"""Model - Common base for every node of a feature document tree.

This module provides the core data structures:
- NodeKind: Enum of node types
- SourceLocation: Where a node was defined in its source text
- Model: Base node with ancestry, traversal, equality and text output
- Keyworded: Mixin for nodes introduced by a keyword
- build_model: Construct the right node class for a Record
"""

from __future__ import annotations

import weakref
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterator, TypeVar

from featuremodel.errors import ModelError, ParseError
from featuremodel.parsing import dialect_keywords, parse_text, stand_alone_file_name

if TYPE_CHECKING:
    from featuremodel.parsing import DialectKeywords, RawData, Record

M = TypeVar("M", bound="Model")


class NodeKind(Enum):
    """Types of nodes in a feature document tree."""

    CELL = "cell"
    ROW = "row"
    TAG = "tag"
    TABLE = "table"
    DOC_STRING = "doc_string"
    STEP = "step"
    BACKGROUND = "background"
    SCENARIO = "scenario"
    OUTLINE = "outline"
    EXAMPLE = "example"
    RULE = "rule"
    FEATURE = "feature"
    FEATURE_FILE = "feature_file"
    DIRECTORY = "directory"
    COMMENT = "comment"


# Lookup names that match more than one kind.
_KIND_ALIASES: dict[str, frozenset[NodeKind]] = {
    "test": frozenset({NodeKind.SCENARIO, NodeKind.OUTLINE}),
}

_MODEL_TYPES: dict[NodeKind, type[Model]] = {}


@dataclass(frozen=True)
class SourceLocation:
    """Position of a node in the text it was parsed from.

    Attributes:
        line: 1-based line number.
        column: 1-based column, when the parser reports one.
    """

    line: int
    column: int | None = None

    def __str__(self) -> str:
        """Return string representation for display."""
        if self.column is not None:
            return f"{self.line}:{self.column}"
        return str(self.line)


def _resolve_kinds(kind: NodeKind | str) -> frozenset[NodeKind]:
    if isinstance(kind, NodeKind):
        return frozenset({kind})
    if kind in _KIND_ALIASES:
        return _KIND_ALIASES[kind]
    return frozenset({NodeKind(kind)})


def build_model(record: Record) -> Model:
    """Create the node class registered for ``record.kind``."""
    return _MODEL_TYPES[NodeKind(record.kind)].from_record(record)


class Model:
    """A node in a feature document tree.

    Subclasses set ``kind`` and mix in the capability interfaces they
    implement. Parents own their children; each child keeps only a weak
    reference back to its parent, set once when it is attached.

    Attributes:
        source_location: Where the node was parsed from, if it was.
        raw_data: Capsule holding the parser's data for this node.
    """

    kind: ClassVar[NodeKind]

    def __init__(self) -> None:
        self._parent: weakref.ref[Model] | None = None
        self.source_location: SourceLocation | None = None
        self.raw_data: RawData | None = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "kind" in cls.__dict__:
            _MODEL_TYPES[cls.kind] = cls

    # Construction
    @classmethod
    def from_record(cls: type[M], record: Record) -> M:
        """Build a node (and its subtree) from a normalized record."""
        model = cls()
        model._populate(record)
        return model

    @classmethod
    def from_text(cls: type[M], source_text: str, dialect: str | None = None) -> M:
        """Parse a stand-alone fragment of this node kind.

        Args:
            source_text: Gherkin text for just this node.
            dialect: Dialect key; defaults to the parsing module default.

        Raises:
            ParseError: If the text cannot be parsed, or does not describe
                a node of this kind. The error names a synthetic
                ``featuremodel_stand_alone_<kind>.feature`` file.
        """
        file_name = stand_alone_file_name(cls.kind.value)
        keywords = dialect_keywords(dialect)
        document = parse_text(cls._wrap_source(source_text, keywords), file_name, dialect)
        record = cls._select_record(document)
        if record is None or record.kind != cls.kind.value:
            raise ParseError(file_name, f"Source text does not describe a {cls.kind.value}")
        return cls.from_record(record)

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        """Embed a fragment in enough surrounding text to form a document."""
        return source_text

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        """Pick this node's record out of the wrapped document."""
        return None

    def _populate(self, record: Record) -> None:
        if record.line is not None:
            self.source_location = SourceLocation(line=record.line)
        self.raw_data = record.raw

    # Ancestry
    @property
    def parent(self) -> Model | None:
        """The node this one is attached to, if it is still alive."""
        return self._parent() if self._parent is not None else None

    def _attach(self, parent: Model) -> None:
        current = self.parent
        if current is parent:
            return
        if current is not None:
            raise ModelError(f"{self!r} is already attached to {current!r}")
        self._parent = weakref.ref(parent)

    def _adopt(self, child: M) -> M:
        child._attach(self)
        return child

    def _disown(self, child: M) -> M:
        if child.parent is self:
            child._parent = None
        return child

    def get_ancestor(self, kind: NodeKind | str) -> Model | None:
        """Return the nearest ancestor of the requested kind.

        Args:
            kind: A NodeKind, its string value ("feature_file"), or "test"
                for either a scenario or an outline.

        Returns:
            The closest matching ancestor, or None if there is none.

        Raises:
            ValueError: If ``kind`` names no node kind.
        """
        wanted = _resolve_kinds(kind)
        for ancestor in self.ancestors():
            if ancestor.kind in wanted:
                return ancestor
        return None

    def ancestors(self) -> Iterator[Model]:
        """Iterate from the immediate parent up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    # Traversal
    def children(self) -> list[Model]:
        """Immediate sub-elements, in source order."""
        return []

    def walk(self, order: str = "pre") -> Iterator[Model]:
        """Iterate over this node and its descendants.

        Args:
            order: "pre" (parent first), "post" (children first) or
                "level" (breadth-first).
        """
        if order == "pre":
            yield from self._walk_preorder()
        elif order == "post":
            yield from self._walk_postorder()
        elif order == "level":
            queue: deque[Model] = deque([self])
            while queue:
                node = queue.popleft()
                yield node
                queue.extend(node.children())
        else:
            raise ValueError(f"Unknown traversal order: {order}")

    def _walk_preorder(self) -> Iterator[Model]:
        yield self
        for child in self.children():
            yield from child._walk_preorder()

    def _walk_postorder(self) -> Iterator[Model]:
        for child in self.children():
            yield from child._walk_postorder()
        yield self

    def find(self, predicate: Callable[[Model], bool]) -> Iterator[Model]:
        """Find this node or descendants matching ``predicate``."""
        return (node for node in self.walk() if predicate(node))

    def find_by_kind(self, kind: NodeKind | str) -> Iterator[Model]:
        """Find this node or descendants of a kind (or "test")."""
        wanted = _resolve_kinds(kind)
        return self.find(lambda node: node.kind in wanted)

    # Diagnostics
    @property
    def parsing_data(self) -> Any:
        """The parser's own data for this node, or None if built abstractly."""
        return self.raw_data.data if self.raw_data is not None else None

    @property
    def source_line(self) -> int | None:
        return self.source_location.line if self.source_location is not None else None

    # Comparison and output
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        from featuremodel.models.equality import models_equal

        return models_equal(self, other)

    __hash__ = None  # type: ignore[assignment]

    def to_text(self) -> str:
        """Render the node as canonical Gherkin text."""
        from featuremodel.serialize import to_text

        return to_text(self)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} line={self.source_line}>"


class Keyworded:
    """Mixin for nodes introduced by a keyword ("Scenario", "Given", ...)."""

    def __init__(self) -> None:
        super().__init__()
        self.keyword: str = ""

    def _populate(self, record: Record) -> None:
        super()._populate(record)  # type: ignore[misc]
        self.keyword = record.keyword
