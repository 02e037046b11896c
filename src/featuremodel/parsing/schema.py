"""Schema normalization for gherkin parser output.

The gherkin parser has changed its output shape several times. Each known
shape gets its own decoder; ``normalize`` picks one and returns a
``Record`` tree of kind "document" whose children hold the feature (if
any) and whose comments hold the document's comments.

Exports:
- detect_schema: Identify which SchemaVersion produced some output
- normalize: Decode parser output into a Record tree
- SchemaDecoder: Protocol implemented by the per-version decoders
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from gherkin.dialect import Dialect

from featuremodel.parsing.records import RawData, Record, SchemaVersion


@runtime_checkable
class SchemaDecoder(Protocol):
    """Protocol for per-version decoders."""

    schema: SchemaVersion

    def decode(self, raw: Any) -> Record:
        """Decode a complete parser result into a document Record."""
        ...


def _keyword(data: dict[str, Any]) -> str:
    return (data.get("keyword") or "").strip()


def outline_keywords_for(language: str) -> frozenset[str]:
    """Scenario outline keywords of a dialect; English when it is unknown."""
    dialect = Dialect.for_name(language or "en") or Dialect.for_name("en")
    return frozenset(keyword.strip() for keyword in dialect.scenario_outline_keywords)


class _AstDecoder:
    """Shared decoding for the two AST-style schemas.

    Both nest source positions under ``location`` and describe tags,
    table rows and comments the same way; they differ in how feature
    children and step arguments are wrapped.
    """

    schema: SchemaVersion

    def _raw(self, data: Any) -> RawData:
        return RawData(self.schema, data)

    def _line(self, data: dict[str, Any]) -> int | None:
        return (data.get("location") or {}).get("line")

    def _section(self, kind: str, data: dict[str, Any]) -> Record:
        return Record(
            kind=kind,
            line=self._line(data),
            keyword=_keyword(data),
            name=data.get("name") or "",
            description=data.get("description") or "",
            tags=[self._tag(tag) for tag in data.get("tags") or []],
            raw=self._raw(data),
        )

    def _tag(self, data: dict[str, Any]) -> Record:
        return Record(kind="tag", line=self._line(data), name=data.get("name") or "", raw=self._raw(data))

    def _comment(self, data: dict[str, Any]) -> Record:
        return Record(
            kind="comment",
            line=self._line(data),
            text=(data.get("text") or "").strip(),
            raw=self._raw(data),
        )

    def _row(self, data: dict[str, Any]) -> Record:
        cells = [
            Record(kind="cell", line=self._line(cell), text=cell.get("value") or "", raw=self._raw(cell))
            for cell in data.get("cells") or []
        ]
        return Record(kind="row", line=self._line(data), cells=cells, raw=self._raw(data))

    def _table(self, data: dict[str, Any]) -> Record:
        return Record(
            kind="table",
            line=self._line(data),
            rows=[self._row(row) for row in data.get("rows") or []],
            raw=self._raw(data),
        )

    def _doc_string(self, data: dict[str, Any]) -> Record:
        return Record(
            kind="doc_string",
            line=self._line(data),
            text=data.get("content") or "",
            content_type=data.get("mediaType") or data.get("contentType") or "",
            raw=self._raw(data),
        )

    def _block(self, data: dict[str, Any]) -> Record | None:
        raise NotImplementedError

    def _step(self, data: dict[str, Any]) -> Record:
        return Record(
            kind="step",
            line=self._line(data),
            keyword=_keyword(data),
            text=data.get("text") or "",
            block=self._block(data),
            raw=self._raw(data),
        )

    def _example(self, data: dict[str, Any]) -> Record:
        record = self._section("example", data)
        header = data.get("tableHeader")
        rows = ([header] if header else []) + list(data.get("tableBody") or [])
        record.rows = [self._row(row) for row in rows]
        return record

    def _test(self, kind: str, data: dict[str, Any]) -> Record:
        record = self._section(kind, data)
        record.steps = [self._step(step) for step in data.get("steps") or []]
        record.examples = [self._example(example) for example in data.get("examples") or []]
        return record

    def _feature(self, data: dict[str, Any], children: list[Any]) -> Record:
        record = self._section("feature", data)
        record.language = data.get("language") or ""
        record.children = [self._child(child) for child in children]
        return record

    def _child(self, data: dict[str, Any]) -> Record:
        raise NotImplementedError


class TypedAstDecoder(_AstDecoder):
    """Decoder for output whose every node carries a ``type`` field.

    Covers both the bare-Feature result of the earliest AST releases
    (children under ``scenarioDefinitions``, comments on the feature) and
    the later ``GherkinDocument`` wrapper.
    """

    schema = SchemaVersion.TYPED_AST

    _CHILD_KINDS = {
        "Background": "background",
        "Scenario": "scenario",
        "ScenarioOutline": "outline",
    }

    def decode(self, raw: dict[str, Any]) -> Record:
        document = Record(kind="document", raw=self._raw(raw))
        if raw.get("type") == "GherkinDocument":
            feature = raw.get("feature")
            comments = raw.get("comments") or []
        else:
            feature = raw
            comments = raw.get("comments") or []

        if feature:
            children = feature.get("children") or feature.get("scenarioDefinitions") or []
            if feature.get("background"):
                children = [feature["background"], *children]
            document.children.append(self._feature(feature, children))
        document.comments = [self._comment(comment) for comment in comments]
        return document

    def _child(self, data: dict[str, Any]) -> Record:
        kind = self._CHILD_KINDS.get(data.get("type", ""))
        if kind is None:
            raise ValueError(f"Unknown feature child type: {data.get('type')!r}")
        return self._test(kind, data)

    def _block(self, data: dict[str, Any]) -> Record | None:
        argument = data.get("argument")
        if not argument:
            return None
        if argument.get("type") == "DocString":
            return self._doc_string(argument)
        return self._table(argument)


class CurrentAstDecoder(_AstDecoder):
    """Decoder for untyped AST output.

    Feature and rule children are single-key wrappers
    (``{"scenario": {...}}``). Outlines are scenarios that have examples
    or are introduced by one of the dialect's outline keywords.
    """

    schema = SchemaVersion.CURRENT_AST

    def decode(self, raw: dict[str, Any]) -> Record:
        document = Record(kind="document", raw=self._raw(raw))
        feature = raw.get("feature")
        if feature:
            document.children.append(self._feature(feature, feature.get("children") or []))
        document.comments = [self._comment(comment) for comment in raw.get("comments") or []]
        return document

    def _feature(self, data: dict[str, Any], children: list[Any]) -> Record:
        record = self._section("feature", data)
        record.language = data.get("language") or ""
        outline_keywords = outline_keywords_for(record.language)
        record.children = [self._child(child, outline_keywords) for child in children]
        return record

    def _child(self, data: dict[str, Any], outline_keywords: frozenset[str] = frozenset()) -> Record:
        if "background" in data:
            return self._test("background", data["background"])
        if "rule" in data:
            rule = data["rule"]
            record = self._section("rule", rule)
            record.children = [self._child(child, outline_keywords) for child in rule.get("children") or []]
            return record
        if "scenario" in data:
            scenario = data["scenario"]
            is_outline = bool(scenario.get("examples")) or _keyword(scenario) in outline_keywords
            return self._test("outline" if is_outline else "scenario", scenario)
        raise ValueError(f"Unknown feature child: {sorted(data)}")

    def _block(self, data: dict[str, Any]) -> Record | None:
        if data.get("docString"):
            return self._doc_string(data["docString"])
        if data.get("dataTable"):
            return self._table(data["dataTable"])
        return None


class LegacyJsonDecoder:
    """Decoder for the JSON produced by the pre-AST parser.

    Positions are flat ``line`` fields, sections live under ``elements``
    and table cells are plain strings.
    """

    schema = SchemaVersion.LEGACY_JSON

    _ELEMENT_KINDS = {
        "background": "background",
        "scenario": "scenario",
        "scenario_outline": "outline",
    }

    def decode(self, raw: Any) -> Record:
        features = raw if isinstance(raw, list) else [raw]
        document = Record(kind="document", raw=RawData(self.schema, raw))
        if not features:
            return document

        feature = features[0]
        comments = list(feature.get("comments") or [])
        for element in feature.get("elements") or []:
            comments.extend(element.get("comments") or [])

        document.children.append(self._feature(feature))
        document.comments = sorted(
            (self._comment(comment) for comment in comments),
            key=lambda record: record.line or 0,
        )
        return document

    def _section(self, kind: str, data: dict[str, Any]) -> Record:
        return Record(
            kind=kind,
            line=data.get("line"),
            keyword=_keyword(data),
            name=data.get("name") or "",
            description=data.get("description") or "",
            tags=[
                Record(kind="tag", line=tag.get("line"), name=tag.get("name") or "", raw=RawData(self.schema, tag))
                for tag in data.get("tags") or []
            ],
            raw=RawData(self.schema, data),
        )

    def _comment(self, data: dict[str, Any]) -> Record:
        return Record(
            kind="comment",
            line=data.get("line"),
            text=(data.get("value") or "").strip(),
            raw=RawData(self.schema, data),
        )

    def _rows(self, rows: list[dict[str, Any]]) -> list[Record]:
        return [
            Record(
                kind="row",
                line=row.get("line"),
                cells=[
                    Record(kind="cell", line=row.get("line"), text=cell, raw=RawData(self.schema, cell))
                    for cell in row.get("cells") or []
                ],
                raw=RawData(self.schema, row),
            )
            for row in rows
        ]

    def _step(self, data: dict[str, Any]) -> Record:
        block = None
        if data.get("doc_string"):
            doc_string = data["doc_string"]
            block = Record(
                kind="doc_string",
                line=doc_string.get("line"),
                text=doc_string.get("value") or "",
                content_type=doc_string.get("content_type") or "",
                raw=RawData(self.schema, doc_string),
            )
        elif data.get("rows"):
            block = Record(
                kind="table",
                line=data["rows"][0].get("line"),
                rows=self._rows(data["rows"]),
                raw=RawData(self.schema, data["rows"]),
            )
        return Record(
            kind="step",
            line=data.get("line"),
            keyword=_keyword(data),
            text=data.get("name") or "",
            block=block,
            raw=RawData(self.schema, data),
        )

    def _element(self, data: dict[str, Any]) -> Record:
        kind = self._ELEMENT_KINDS.get(data.get("type", ""))
        if kind is None:
            raise ValueError(f"Unknown element type: {data.get('type')!r}")
        record = self._section(kind, data)
        record.steps = [self._step(step) for step in data.get("steps") or []]
        for example in data.get("examples") or []:
            example_record = self._section("example", example)
            example_record.rows = self._rows(example.get("rows") or [])
            record.examples.append(example_record)
        return record

    def _feature(self, data: dict[str, Any]) -> Record:
        record = self._section("feature", data)
        record.children = [self._element(element) for element in data.get("elements") or []]
        return record


_DECODERS: dict[SchemaVersion, SchemaDecoder] = {
    SchemaVersion.LEGACY_JSON: LegacyJsonDecoder(),
    SchemaVersion.TYPED_AST: TypedAstDecoder(),
    SchemaVersion.CURRENT_AST: CurrentAstDecoder(),
}


def detect_schema(raw: Any) -> SchemaVersion:
    """Identify the schema version of a parser result.

    Raises:
        TypeError: If ``raw`` is not a parser result at all.
    """
    if isinstance(raw, list):
        return SchemaVersion.LEGACY_JSON
    if not isinstance(raw, dict):
        raise TypeError(f"Unsupported parser output: {type(raw).__name__}")
    if raw.get("type") in ("GherkinDocument", "Feature"):
        return SchemaVersion.TYPED_AST
    if "elements" in raw or ("line" in raw and "location" not in raw):
        return SchemaVersion.LEGACY_JSON
    return SchemaVersion.CURRENT_AST


def normalize(raw: Any) -> Record:
    """Decode a parser result of any known schema into a document Record."""
    return _DECODERS[detect_schema(raw)].decode(raw)
