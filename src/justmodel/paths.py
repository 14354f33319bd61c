"""Path resolution against snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .types import UNDEFINED, PathLike, PathSegment


def split_path(path: PathLike, separator: str = ".") -> tuple[PathSegment, ...]:
    """Normalize a dotted string or segment sequence into a segment tuple.

    The empty string maps to the empty tuple, which addresses the whole
    snapshot.
    """

    if isinstance(path, str):
        if path == "":
            return ()
        return tuple(path.split(separator))
    return tuple(path)


def _step(container: Any, segment: PathSegment) -> Any:
    if isinstance(container, Mapping):
        if segment in container:
            return container[segment]
        if isinstance(segment, str) and segment.isdigit() and int(segment) in container:
            return container[int(segment)]
        return UNDEFINED
    if isinstance(container, tuple):
        if isinstance(segment, str):
            if not segment.isdigit():
                return UNDEFINED
            segment = int(segment)
        if isinstance(segment, bool) or not isinstance(segment, int):
            return UNDEFINED
        if -len(container) <= segment < len(container):
            return container[segment]
    return UNDEFINED


def get_in(snapshot: Any, segments: tuple[PathSegment, ...]) -> Any:
    """Return the value at ``segments`` or ``UNDEFINED`` when it does not resolve."""

    value = snapshot
    for segment in segments:
        value = _step(value, segment)
        if value is UNDEFINED:
            return UNDEFINED
    return value


def has_in(snapshot: Any, segments: tuple[PathSegment, ...]) -> bool:
    """Return whether ``segments`` resolves to a defined value.

    An empty path asks whether the snapshot holds anything at all.
    """

    if not segments:
        return bool(snapshot)
    return get_in(snapshot, segments) is not UNDEFINED


__all__ = ["get_in", "has_in", "split_path"]
