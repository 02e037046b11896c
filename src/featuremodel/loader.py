"""
Feature loading utilities.

Builds FeatureFile and Directory trees from paths on disk, using the
scanner to find and read documents and the parsing adapter to model
them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from featuremodel.config import load_config
from featuremodel.models import Directory, FeatureFile
from featuremodel.scanning import FeatureScanner

logger = logging.getLogger(__name__)


def _dialect(config: dict[str, Any] | None, dialect: str | None) -> str | None:
    if dialect is not None:
        return dialect
    if config is not None:
        return config.get("parsing", {}).get("dialect")
    return None


def load_feature_file(
    path: Path | str,
    dialect: str | None = None,
    config: dict[str, Any] | None = None,
) -> FeatureFile:
    """Read and model a single feature document.

    Args:
        path: Document to read.
        dialect: Dialect key; falls back to the configuration, then the
            parsing module default.
        config: Loaded configuration, if any.

    Raises:
        ParseError: Naming ``path`` if the document does not parse.
    """
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    return FeatureFile.from_text(text, dialect=_dialect(config, dialect), path=str(file_path))


def load_directory(path: Path | str, config: dict[str, Any] | None = None) -> Directory:
    """Model a directory tree of feature documents.

    Documents and sub-directories are attached in name order. When
    ``scanning.recursive`` is false only the top directory is read.

    Args:
        path: Root directory.
        config: Loaded configuration; ``load_config()`` when omitted.
    """
    config = config if config is not None else load_config()
    scanner = FeatureScanner.from_config(config)
    recursive = config.get("scanning", {}).get("recursive", True)
    return _load_directory(Path(path), scanner, _dialect(config, None), recursive)


def _load_directory(path: Path, scanner: FeatureScanner, dialect: str | None, recursive: bool) -> Directory:
    logger.debug("Loading directory %s", path)
    directory = Directory(str(path))
    for source in scanner.iter_sources(path):
        directory.add_feature_file(FeatureFile.from_text(source.text, dialect=dialect, path=str(source.path)))
    if recursive:
        for sub_path in scanner.iter_directories(path):
            directory.add_directory(_load_directory(sub_path, scanner, dialect, recursive))
    return directory
