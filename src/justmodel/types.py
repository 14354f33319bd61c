"""Shared type aliases and sentinels for the model layer."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Final, Literal

PathSegment = str | int
PathLike = str | Sequence[PathSegment]
JsonMapping = Mapping[str, Any]


class _Undefined(Enum):
    """Marker for values absent from a snapshot."""

    UNDEFINED = "undefined"

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = _Undefined.UNDEFINED

__all__ = [
    "UNDEFINED",
    "JsonMapping",
    "PathLike",
    "PathSegment",
]
