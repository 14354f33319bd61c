"""Update engine: merge partials, revalidate, produce the next snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from .exceptions import ModelError, ValidationError
from .schema import Schema
from .snapshot import FrozenMap, freeze, merge_deep, thaw

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateOutcome:
    """Result of running candidate data through a schema.

    Exactly one of ``value`` and ``error`` is set.
    """

    value: FrozenMap | None = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> FrozenMap:
        if self.error is not None:
            raise self.error
        if self.value is None:
            msg = "Update outcome carries neither a value nor an error"
            raise ModelError(msg)
        return self.value


def _as_partial(entry: Any) -> Mapping[Any, Any] | None:
    if isinstance(entry, BaseModel):
        return entry.model_dump(exclude_unset=True)
    if isinstance(entry, Mapping):
        return entry
    return None


def validate_candidate(
    candidate: Any,
    schema: Schema,
    *,
    model_name: str,
) -> UpdateOutcome:
    """Validate plain ``candidate`` data and freeze the defaulted result."""

    result = schema.validate(candidate)
    if result.error is not None:
        details = result.details
        logger.debug(
            "Validation of %s failed with %d error(s)", model_name, len(details) or 1
        )
        error = ValidationError(
            f"Error validating model '{model_name}': {result.error}",
            model=model_name,
            data=candidate,
            details=details,
        )
        return UpdateOutcome(error=error)
    value = freeze(result.value)
    if not isinstance(value, FrozenMap):
        error = ValidationError(
            f"Schema for model '{model_name}' produced a non-mapping value",
            model=model_name,
            data=candidate,
        )
        return UpdateOutcome(error=error)
    return UpdateOutcome(value=value)


def apply_update(
    current: FrozenMap,
    partials: Iterable[Any],
    schema: Schema,
    *,
    model_name: str,
) -> UpdateOutcome:
    """Deep-merge ``partials`` into ``current`` in order and revalidate.

    ``current`` is never modified; the merge happens on a new snapshot that is
    only returned once the schema accepts it.
    """

    merged = current
    for entry in partials:
        partial = _as_partial(entry)
        if partial is None:
            msg = (
                f"Partial update for model '{model_name}' must be a mapping, "
                f"got {type(entry).__name__}"
            )
            return UpdateOutcome(error=ValidationError(msg, model=model_name, data=entry))
        merged = merge_deep(merged, partial)
    return validate_candidate(
        thaw(merged),
        schema,
        model_name=model_name,
    )


__all__ = ["UpdateOutcome", "apply_update", "validate_candidate"]
