"""Tests for the parsing adapter."""

import pytest

from featuremodel import parsing
from featuremodel.errors import ParseError
from featuremodel.parsing import SchemaVersion, parse_text


class TestParseText:
    """Tests for parse_text()."""

    def test_returns_document_record(self):
        """A document parses into a document record holding its feature."""
        document = parse_text("Feature: Parsed\n\n  Scenario: One\n    * a step\n")

        assert document.kind == "document"
        feature = document.first_child("feature")
        assert feature.name == "Parsed"
        assert [child.kind for child in feature.children] == ["scenario"]

    def test_current_parser_output_schema(self):
        """The installed parser produces the current AST shape."""
        document = parse_text("Feature: Parsed\n")

        assert document.raw.schema is SchemaVersion.CURRENT_AST

    def test_collects_comments(self):
        """Comment lines are kept on the document record."""
        document = parse_text("# first\nFeature: Parsed\n  # second\n")

        assert [comment.text for comment in document.comments] == ["# first", "# second"]
        assert [comment.line for comment in document.comments] == [1, 3]

    def test_failure_names_the_file(self):
        """Parse errors name the file they were parsing."""
        with pytest.raises(ParseError, match="'broken.feature'") as excinfo:
            parse_text("Feature: Broken\n@dangling\n", file_name="broken.feature")

        assert excinfo.value.file_name == "broken.feature"

    def test_failure_default_file_name(self):
        """Without a file name, errors name the default source."""
        with pytest.raises(ParseError, match=parsing.DEFAULT_FILE_NAME):
            parse_text("not gherkin at all")


class TestDialects:
    """Tests for dialect selection."""

    def test_default_dialect_is_english(self):
        """The module default comes from the default configuration."""
        assert parsing.get_dialect() == "en"

    def test_set_dialect_changes_default(self):
        """set_dialect() changes the dialect used by parse_text()."""
        parsing.set_dialect("en-au")

        document = parse_text("Pretty much: Aussie feature\n")

        assert document.first_child("feature").name == "Aussie feature"

    def test_configure_from_config(self):
        """configure() applies the [parsing] section."""
        parsing.configure({"parsing": {"dialect": "en-au"}})

        assert parsing.get_dialect() == "en-au"

    def test_explicit_dialect_wins(self):
        """An explicit dialect overrides the module default."""
        parsing.set_dialect("en-au")

        document = parse_text("Feature: English feature\n", dialect="en")

        assert document.first_child("feature").name == "English feature"

    def test_dialect_keywords(self):
        """Primary section keywords come from the dialect table."""
        keywords = parsing.dialect_keywords("en")

        assert keywords.feature == "Feature"
        assert keywords.background == "Background"
        assert keywords.outline == "Scenario Outline"

    def test_unknown_dialect_keywords(self):
        """Asking for an unknown dialect's keywords is an error."""
        with pytest.raises(ValueError, match="no-such-dialect"):
            parsing.dialect_keywords("no-such-dialect")

    def test_stand_alone_file_name(self):
        """Fragments get a synthetic per-kind file name."""
        assert parsing.stand_alone_file_name("row") == "featuremodel_stand_alone_row.feature"
