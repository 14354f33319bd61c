"""Immutable, schema-validated models with change tracking."""

from .config import ErrorPolicy, ModelSettings, get_settings, reset_settings
from .engine import UpdateOutcome, apply_update
from .exceptions import (
    FieldMissingError,
    ModelError,
    PropertyMissingError,
    SchemaError,
    ValidationError,
)
from .fields import FieldAccessor, FieldView
from .model import Model
from .schema import (
    ANY_SCHEMA,
    PydanticSchema,
    Schema,
    SchemaResult,
    SchemaSet,
    define_schema,
    extend_schema,
)
from .snapshot import EMPTY, FrozenMap, freeze, thaw
from .types import UNDEFINED

__version__ = "0.1.0"

__all__ = [
    "ANY_SCHEMA",
    "EMPTY",
    "UNDEFINED",
    "ErrorPolicy",
    "FieldAccessor",
    "FieldMissingError",
    "FieldView",
    "FrozenMap",
    "Model",
    "ModelError",
    "ModelSettings",
    "PropertyMissingError",
    "PydanticSchema",
    "Schema",
    "SchemaError",
    "SchemaResult",
    "SchemaSet",
    "UpdateOutcome",
    "ValidationError",
    "apply_update",
    "define_schema",
    "extend_schema",
    "freeze",
    "get_settings",
    "reset_settings",
    "thaw",
]
