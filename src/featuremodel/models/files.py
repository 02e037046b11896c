"""File-system level nodes: FeatureFile and Directory.

Neither node reads from disk itself; ``featuremodel.loader`` scans
directories and hands the text over.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from featuremodel.models.base import Model, NodeKind, build_model
from featuremodel.models.capabilities import Containing
from featuremodel.parsing import parse_text, stand_alone_file_name

if TYPE_CHECKING:
    from featuremodel.models.comment import Comment
    from featuremodel.models.feature import Feature
    from featuremodel.parsing import Record


class FeatureFile(Containing, Model):
    """One feature document.

    Attributes:
        path: Where the document was read from ("" when parsed from text).
        feature: The document's feature, if it has one.
        comments: Comment lines in source order.
    """

    kind = NodeKind.FEATURE_FILE

    def __init__(self, path: str = "") -> None:
        super().__init__()
        self.path = path
        self.feature: Feature | None = None
        self.comments: list[Comment] = []

    @classmethod
    def from_text(cls, source_text: str, dialect: str | None = None, path: str = "") -> FeatureFile:
        """Parse a complete feature document.

        Args:
            source_text: The document text.
            dialect: Dialect key; defaults to the parsing module default.
            path: Source path, also used as the file name in errors.
        """
        file_name = path or stand_alone_file_name(cls.kind.value)
        document = parse_text(source_text, file_name, dialect)
        feature_file = cls(path)
        feature_file._populate(document)
        return feature_file

    def _populate(self, record: Record) -> None:
        super()._populate(record)
        feature = record.first_child(NodeKind.FEATURE.value)
        if feature is not None:
            self.feature = self._adopt(build_model(feature))
        self.comments = [self._adopt(build_model(comment)) for comment in record.comments]

    @property
    def name(self) -> str:
        return Path(self.path).name if self.path else ""

    def children(self) -> list[Model]:
        return [self.feature] if self.feature is not None else []

    def __repr__(self) -> str:
        return f"<FeatureFile {self.path!r}>"


class Directory(Containing, Model):
    """A directory of feature documents.

    Attributes:
        path: The directory path.
        feature_files: Documents directly inside, in name order.
        directories: Sub-directories, in name order.
    """

    kind = NodeKind.DIRECTORY

    def __init__(self, path: str = "") -> None:
        super().__init__()
        self.path = path
        self.feature_files: list[FeatureFile] = []
        self.directories: list[Directory] = []

    def add_feature_file(self, feature_file: FeatureFile) -> FeatureFile:
        """Attach a feature file as the last document of this directory."""
        self.feature_files.append(self._adopt(feature_file))
        return feature_file

    def add_directory(self, directory: Directory) -> Directory:
        """Attach a sub-directory as the last one of this directory."""
        self.directories.append(self._adopt(directory))
        return directory

    @property
    def name(self) -> str:
        return Path(self.path).name if self.path else ""

    def children(self) -> list[Model]:
        return [*self.feature_files, *self.directories]

    def __repr__(self) -> str:
        return f"<Directory {self.path!r}>"
