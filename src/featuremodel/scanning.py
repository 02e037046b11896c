"""Directory scanning - discover feature documents on disk.

This is the only place (besides the loader) that touches the file
system; model nodes receive text, never paths to read.
"""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

logger = logging.getLogger(__name__)


@dataclass
class FeatureSource:
    """A discovered document.

    Attributes:
        path: Location of the document.
        text: Its full contents.
    """

    path: Path
    text: str


@dataclass
class FeatureScanner:
    """Lists feature documents and sub-directories of a directory.

    Attributes:
        patterns: Glob patterns a document's name must match.
        skip_dirs: Directory names never descended into.
        skip_files: File names never read.
    """

    patterns: list[str] = field(default_factory=lambda: ["*.feature"])
    skip_dirs: list[str] = field(default_factory=list)
    skip_files: list[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> FeatureScanner:
        """Build a scanner from the ``[scanning]`` configuration section."""
        scanning = config.get("scanning", {})
        return cls(
            patterns=list(scanning.get("patterns") or ["*.feature"]),
            skip_dirs=list(scanning.get("skip_dirs") or []),
            skip_files=list(scanning.get("skip_files") or []),
        )

    def _matches(self, path: Path) -> bool:
        if path.name in self.skip_files:
            return False
        return any(fnmatch.fnmatch(path.name, pattern) for pattern in self.patterns)

    def iter_sources(self, directory: Path | str) -> Iterator[FeatureSource]:
        """Yield documents directly inside ``directory``, sorted by name."""
        for path in sorted(Path(directory).iterdir()):
            if path.is_file() and self._matches(path):
                logger.debug("Reading %s", path)
                yield FeatureSource(path=path, text=path.read_text(encoding="utf-8"))

    def iter_directories(self, directory: Path | str) -> Iterator[Path]:
        """Yield sub-directories of ``directory``, sorted by name."""
        for path in sorted(Path(directory).iterdir()):
            if path.is_dir() and path.name not in self.skip_dirs:
                yield path
