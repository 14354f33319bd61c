"""Versioned model base class.

A model wraps two frozen snapshots: ``current``, the present value, and
``original``, the value at the last load or commit. Updates deep-merge
partial data into ``current`` and revalidate it; ``original`` only moves on
commit. Immutable operations return new instances that share unchanged
structure with the receiver. The ``*_in_place`` operations rebind the
receiver's own snapshots and are not safe for concurrent use on a single
instance.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Self

from pydantic import BaseModel

from .changes import values_differ
from .config import ErrorPolicy, ModelSettings, get_settings
from .engine import UpdateOutcome, apply_update, validate_candidate
from .exceptions import PropertyMissingError
from .fields import install_field_accessors
from .paths import get_in, has_in, split_path
from .schema import ANY_SCHEMA, Schema, SchemaSet, as_schema
from .snapshot import EMPTY, FrozenMap, thaw
from .types import UNDEFINED, PathLike, PathSegment

logger = logging.getLogger(__name__)


class Model:
    """Schema-validated, change-tracked wrapper around nested data.

    Subclasses declare their schema variants as plain class attributes:
    ``schema`` is the base, and ``create_schema``, ``update_schema`` and
    ``load_schema`` fall back to it when left as ``None``. Each accepts a
    pydantic model class or any object with a ``validate`` method returning a
    :class:`~justmodel.schema.SchemaResult`.
    """

    schema: ClassVar[Any] = ANY_SCHEMA
    create_schema: ClassVar[Any] = None
    update_schema: ClassVar[Any] = None
    load_schema: ClassVar[Any] = None

    settings: ClassVar[ModelSettings | None] = None
    error_policy: ClassVar[ErrorPolicy | None] = None
    expose_fields: ClassVar[bool] = False

    schemas: ClassVar[SchemaSet] = SchemaSet.resolve(ANY_SCHEMA)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.schemas = SchemaSet.resolve(
            cls.schema,
            create=cls.create_schema,
            update=cls.update_schema,
            load=cls.load_schema,
        )
        if cls.expose_fields:
            install_field_accessors(cls)

    def __init__(self, current: FrozenMap = EMPTY, original: FrozenMap | None = None) -> None:
        self._current = current
        self._original = current if original is None else original

    # ------------------------------------------------------------------
    # Lifecycle constructors
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, data: Mapping[str, Any] | BaseModel) -> Self:
        """Load already persisted data; nothing reads as changed afterwards."""

        if isinstance(data, BaseModel):
            data = data.model_dump()
        outcome = validate_candidate(
            data,
            cls.schemas.load,
            model_name=cls.__name__,
        )
        if outcome.error is not None:
            return cls._surface(outcome)
        logger.debug("Loaded %s", cls.__name__)
        value = outcome.unwrap()
        return cls(value, value)

    @classmethod
    def create(cls, *data: Mapping[str, Any] | BaseModel) -> Self:
        """Create a new model from partials; every populated field reads as changed."""

        model = cls(EMPTY, EMPTY)
        created = model._apply(data, cls.schemas.create, in_place=True)
        if created is model:
            logger.debug("Created %s", cls.__name__)
        return created

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update(self, *data: Mapping[str, Any] | BaseModel, schema: Any = None) -> Self:
        """Return a new model with ``data`` merged into the current value."""

        resolved = self.schemas.update if schema is None else as_schema(schema)
        return self._apply(data, resolved, in_place=False)

    def update_in_place(self, *data: Mapping[str, Any] | BaseModel) -> Self:
        """Merge ``data`` into the current value of this instance."""

        return self._apply(data, self.schemas.update, in_place=True)

    def commit(self) -> Self:
        """Return a new model whose original value is this model's current value."""

        logger.debug("Committed %s", type(self).__name__)
        return type(self)(self._current, self._current)

    def commit_in_place(self) -> Self:
        """Reset change tracking on this instance to its current value."""

        logger.debug("Committed %s in place", type(self).__name__)
        self._original = self._current
        return self

    def clone(self) -> Self:
        return type(self)(self._current, self._original)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def current(self) -> FrozenMap:
        return self._current

    @property
    def original(self) -> FrozenMap:
        return self._original

    def value(self) -> dict[str, Any]:
        """Return the current value as plain nested data."""

        return thaw(self._current)

    def has(self, path: PathLike = "") -> bool:
        """Return whether ``path`` is set on the current value.

        The empty path checks whether the model holds any data at all.
        """

        return has_in(self._current, self._split(path))

    def has_old(self, path: PathLike = "") -> bool:
        return has_in(self._original, self._split(path))

    def get(self, path: PathLike = "") -> Any:
        """Return the current value at ``path``.

        Raises :class:`~justmodel.exceptions.PropertyMissingError` when the
        path does not resolve. Nested containers come back frozen.
        """

        segments = self._split(path)
        if not segments:
            return self._current
        value = get_in(self._current, segments)
        if value is UNDEFINED:
            raise PropertyMissingError(model=type(self).__name__, path=segments)
        return value

    def get_old(self, path: PathLike = "") -> Any:
        """Return the original value at ``path`` or ``UNDEFINED`` when absent."""

        segments = self._split(path)
        if not segments:
            return self._original
        return get_in(self._original, segments)

    def has_changed(self, path: PathLike = "") -> bool:
        """Return whether the value at ``path`` differs from the original."""

        segments = self._split(path)
        if not segments:
            return values_differ(self._current, self._original)
        return values_differ(get_in(self._current, segments), get_in(self._original, segments))

    def equals(self, other: Model) -> bool:
        """Compare current values; original values are ignored."""

        if not isinstance(other, Model):
            return False
        return self._current == other._current

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value()!r})"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @classmethod
    def _settings(cls) -> ModelSettings:
        return cls.settings or get_settings()

    @classmethod
    def _error_policy(cls) -> ErrorPolicy:
        return cls.error_policy or cls._settings().error_policy

    @classmethod
    def _surface(cls, outcome: UpdateOutcome) -> Any:
        if cls._error_policy() is ErrorPolicy.RETURN:
            return outcome
        return outcome.unwrap()

    def _split(self, path: PathLike) -> tuple[PathSegment, ...]:
        return split_path(path, self._settings().path_separator)

    def _apply(self, data: tuple[Any, ...], schema: Schema, *, in_place: bool) -> Self:
        outcome = apply_update(
            self._current,
            data,
            schema,
            model_name=type(self).__name__,
        )
        if outcome.error is not None:
            return self._surface(outcome)
        value = outcome.unwrap()
        if in_place:
            self._current = value
            logger.debug("Updated %s in place", type(self).__name__)
            return self
        logger.debug("Updated %s", type(self).__name__)
        return type(self)(value, self._original)


__all__ = ["Model"]
