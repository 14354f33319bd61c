"""Schema capabilities used to validate and default model data.

Every schema exposes a single ``validate`` operation returning a
:class:`SchemaResult`. Validation is delegated to pydantic: a schema wraps a
``BaseModel`` subclass, validates the candidate against it and dumps the
validated instance back into plain data, which applies field defaults
(including ``default_factory`` values such as identifiers and timestamps).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, create_model
from pydantic import ValidationError as PydanticValidationError

from .exceptions import SchemaError

ExtraPolicy = Literal["allow", "ignore", "forbid"]


@dataclass(frozen=True, slots=True)
class SchemaResult:
    """Outcome of validating a candidate value."""

    value: Any
    error: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def details(self) -> list[Any]:
        if self.error is None:
            return []
        if isinstance(self.error, PydanticValidationError):
            return list(self.error.errors())
        return [str(self.error)]


@runtime_checkable
class Schema(Protocol):
    """Validation capability consulted by models."""

    def validate(self, candidate: Any) -> SchemaResult: ...


@dataclass(frozen=True, slots=True)
class PydanticSchema:
    """Schema backed by a pydantic model class."""

    model: type[BaseModel]

    def validate(self, candidate: Any) -> SchemaResult:
        try:
            validated = self.model.model_validate(candidate)
        except PydanticValidationError as exc:
            return SchemaResult(value=candidate, error=exc)
        return SchemaResult(value=validated.model_dump())

    @property
    def name(self) -> str:
        return self.model.__name__

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self.model.model_fields)

    def field_model(self, name: str) -> type[BaseModel] | None:
        """Return the nested pydantic model declared for ``name``, if any."""

        info = self.model.model_fields.get(name)
        if info is None:
            return None
        annotation = info.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            return annotation
        return None


class AnyDocument(BaseModel):
    """Accepts any mapping and keeps every key."""

    model_config = ConfigDict(extra="allow")


ANY_SCHEMA = PydanticSchema(AnyDocument)


def define_schema(name: str, *, extra: ExtraPolicy = "forbid", **fields: Any) -> PydanticSchema:
    """Build a schema from pydantic field definitions.

    Field definitions follow ``pydantic.create_model``: either a bare type or
    a ``(type, default_or_Field)`` tuple.
    """

    model = create_model(name, __config__=ConfigDict(extra=extra), **fields)
    return PydanticSchema(model)


def extend_schema(base: Schema | type[BaseModel], name: str, **fields: Any) -> PydanticSchema:
    """Return a schema deriving from ``base`` with added or overridden fields."""

    resolved = as_schema(base)
    if not isinstance(resolved, PydanticSchema):
        msg = f"Cannot extend non-pydantic schema {resolved!r}"
        raise SchemaError(msg)
    model = create_model(name, __base__=resolved.model, **fields)
    return PydanticSchema(model)


def as_schema(value: Any) -> Schema:
    """Coerce a schema declaration into a schema capability."""

    if isinstance(value, type) and issubclass(value, BaseModel):
        return PydanticSchema(value)
    if isinstance(value, Schema):
        return value
    msg = f"{value!r} is not a schema; expected a pydantic model or an object with validate()"
    raise SchemaError(msg)


@dataclass(frozen=True, slots=True)
class SchemaSet:
    """The four schema variants attached to a model class."""

    base: Schema
    create: Schema
    update: Schema
    load: Schema

    @classmethod
    def resolve(
        cls,
        base: Any,
        *,
        create: Any = None,
        update: Any = None,
        load: Any = None,
    ) -> SchemaSet:
        resolved = as_schema(base)
        return cls(
            base=resolved,
            create=resolved if create is None else as_schema(create),
            update=resolved if update is None else as_schema(update),
            load=resolved if load is None else as_schema(load),
        )


__all__ = [
    "ANY_SCHEMA",
    "AnyDocument",
    "PydanticSchema",
    "Schema",
    "SchemaResult",
    "SchemaSet",
    "as_schema",
    "define_schema",
    "extend_schema",
]
