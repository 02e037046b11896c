"""
featuremodel - Object model for Gherkin feature documents

featuremodel parses feature documents into a tree of typed nodes,
compares nodes by the capabilities they share, and writes canonical
Gherkin text back out.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("featuremodel")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed

from featuremodel.errors import ConfigError, FeatureModelError, ModelError, ParseError
from featuremodel.loader import load_directory, load_feature_file
from featuremodel.models import (
    Background,
    Cell,
    Comment,
    Directory,
    DocString,
    Example,
    Feature,
    FeatureFile,
    Model,
    NodeKind,
    Outline,
    Row,
    Rule,
    Scenario,
    Step,
    Table,
    Tag,
)

__all__ = [
    "__version__",
    "Background",
    "Cell",
    "Comment",
    "ConfigError",
    "Directory",
    "DocString",
    "Example",
    "Feature",
    "FeatureFile",
    "FeatureModelError",
    "Model",
    "ModelError",
    "NodeKind",
    "Outline",
    "ParseError",
    "Row",
    "Rule",
    "Scenario",
    "Step",
    "Table",
    "Tag",
    "load_directory",
    "load_feature_file",
]
