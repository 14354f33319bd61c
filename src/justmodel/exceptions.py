"""Model layer exceptions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class ModelError(RuntimeError):
    """Base class for model errors."""

    code = "model_error"


class ValidationError(ModelError):
    """Raised when candidate model data fails schema validation."""

    code = "model_validation_error"

    def __init__(
        self,
        message: str,
        *,
        model: str,
        data: Any = None,
        details: Sequence[Any] = (),
    ) -> None:
        super().__init__(message)
        self.model = model
        self.data = data
        self.details = list(details)


class PropertyMissingError(ModelError, LookupError):
    """Raised when a strict lookup does not resolve against current data."""

    code = "property_missing"

    def __init__(self, *, model: str, path: Sequence[Any]) -> None:
        self.model = model
        self.path = tuple(path)
        dotted = ".".join(str(segment) for segment in self.path)
        super().__init__(f"Missing property '{dotted}' on model '{model}'")


class FieldMissingError(PropertyMissingError, AttributeError):
    """Raised when a generated field accessor reads an absent field."""


class SchemaError(ModelError):
    """Raised when a model class is configured with an unusable schema."""

    code = "schema_error"


__all__ = [
    "FieldMissingError",
    "ModelError",
    "PropertyMissingError",
    "SchemaError",
    "ValidationError",
]
