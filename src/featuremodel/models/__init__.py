"""Node hierarchy of a feature document tree.

Importing this package registers every node class, so ``build_model``
can construct any kind of node from a normalized record.
"""

from featuremodel.models.base import Keyworded, Model, NodeKind, SourceLocation, build_model
from featuremodel.models.capabilities import (
    Containing,
    Described,
    Named,
    Stepped,
    TableHolder,
    Tagged,
    Textual,
    trim_description,
)
from featuremodel.models.comment import Comment
from featuremodel.models.equality import capabilities_of, models_equal
from featuremodel.models.feature import Feature, Rule
from featuremodel.models.files import Directory, FeatureFile
from featuremodel.models.sections import Background, Example, Outline, Scenario
from featuremodel.models.steps import DocString, Step
from featuremodel.models.table import Cell, Row, Table
from featuremodel.models.tag import Tag

__all__ = [
    "Background",
    "Cell",
    "Comment",
    "Containing",
    "Described",
    "Directory",
    "DocString",
    "Example",
    "Feature",
    "FeatureFile",
    "Keyworded",
    "Model",
    "Named",
    "NodeKind",
    "Outline",
    "Row",
    "Rule",
    "Scenario",
    "SourceLocation",
    "Step",
    "Stepped",
    "Table",
    "TableHolder",
    "Tag",
    "Tagged",
    "Textual",
    "build_model",
    "capabilities_of",
    "models_equal",
    "trim_description",
]
