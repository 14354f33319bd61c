"""Generated property-style access to model fields.

Model classes that set ``expose_fields = True`` get one descriptor per
top-level field of their base schema. Reads go through ``Model.get`` and
writes through ``Model.update_in_place``, so assignments are validated like
any other update. Fields typed as nested pydantic models read back as
generated views carrying their own descriptors.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from .engine import UpdateOutcome
from .exceptions import FieldMissingError, PropertyMissingError, SchemaError
from .schema import PydanticSchema
from .snapshot import FrozenMap, thaw

if TYPE_CHECKING:
    from .model import Model


def _nest(path: tuple[str, ...], value: Any) -> dict[str, Any]:
    nested: Any = value
    for segment in reversed(path):
        nested = {segment: nested}
    return nested


class FieldView:
    """Attribute view over a nested mapping field of a model."""

    __slots__ = ("_model", "_path")

    def __init__(self, model: Model, path: tuple[str, ...]) -> None:
        self._model = model
        self._path = path

    def value(self) -> Any:
        return thaw(self._model.get(self._path))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldView):
            return self.value() == other.value()
        if isinstance(other, Mapping):
            return self.value() == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        dotted = ".".join(self._path)
        return f"<{type(self).__name__} {dotted}={self.value()!r}>"


class FieldAccessor:
    """Descriptor forwarding to ``get`` and ``update_in_place`` for one field."""

    def __init__(self, name: str, nested: type[BaseModel] | None = None) -> None:
        self.name = name
        self.nested = nested

    def _target(self, instance: Any) -> tuple[Model, tuple[str, ...]]:
        if isinstance(instance, FieldView):
            return instance._model, (*instance._path, self.name)
        return instance, (self.name,)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        model, path = self._target(instance)
        try:
            value = model.get(path)
        except PropertyMissingError as exc:
            raise FieldMissingError(model=exc.model, path=exc.path) from exc
        if self.nested is not None and isinstance(value, FrozenMap):
            return view_type(self.nested)(model, path)
        return thaw(value)

    def __set__(self, instance: Any, value: Any) -> None:
        model, path = self._target(instance)
        if isinstance(value, FieldView):
            value = value.value()
        result = model.update_in_place(_nest(path, value))
        if isinstance(result, UpdateOutcome):
            result.unwrap()


@lru_cache(maxsize=None)
def view_type(model: type[BaseModel]) -> type[FieldView]:
    """Return the generated view class for a nested pydantic model."""

    schema = PydanticSchema(model)
    namespace: dict[str, Any] = {"__slots__": ()}
    for name in schema.field_names:
        namespace[name] = FieldAccessor(name, schema.field_model(name))
    return type(f"{model.__name__}View", (FieldView,), namespace)


def install_field_accessors(cls: type[Model]) -> None:
    """Attach a descriptor to ``cls`` for every field of its base schema."""

    schema = cls.schemas.base
    if not isinstance(schema, PydanticSchema):
        msg = f"{cls.__name__} exposes fields but its schema is not a pydantic schema"
        raise SchemaError(msg)
    for name in schema.field_names:
        if hasattr(cls, name) and not isinstance(getattr(cls, name), FieldAccessor):
            msg = f"Field '{name}' of {cls.__name__} collides with a model attribute"
            raise SchemaError(msg)
        setattr(cls, name, FieldAccessor(name, schema.field_model(name)))


__all__ = ["FieldAccessor", "FieldView", "install_field_accessors", "view_type"]
