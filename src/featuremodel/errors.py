"""Exception types raised by featuremodel."""

from __future__ import annotations


class FeatureModelError(Exception):
    """Base class for all featuremodel errors."""


class ParseError(FeatureModelError):
    """Source text could not be turned into a model.

    Attributes:
        file_name: Real or synthetic name of the parsed source.
        detail: Message from the underlying parser, if any.
    """

    def __init__(self, file_name: str, detail: str = "") -> None:
        self.file_name = file_name
        self.detail = detail
        message = f"Error encountered while parsing '{file_name}'"
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message)


class ModelError(FeatureModelError):
    """An operation is not valid for the current state of a model."""


class ConfigError(FeatureModelError):
    """A configuration file could not be read."""
