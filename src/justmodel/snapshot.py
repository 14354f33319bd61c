"""Persistent snapshot structures backing model data.

Snapshots are plain nested data frozen into read-only containers: mappings
become :class:`FrozenMap`, lists and tuples become tuples, sets become
frozensets. Updates never mutate a snapshot; they produce a new one sharing
every untouched sub-structure with the old.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class FrozenMap(Mapping[Any, Any]):
    """Read-only mapping compared by value."""

    __slots__ = ("_data", "_hash")

    def __init__(self, items: Mapping[Any, Any] | None = None) -> None:
        self._data: dict[Any, Any] = dict(items or {})
        self._hash: int | None = None

    @classmethod
    def _adopt(cls, data: dict[Any, Any]) -> FrozenMap:
        # Takes ownership of ``data`` without copying it.
        instance = cls.__new__(cls)
        instance._data = data
        instance._hash = None
        return instance

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return strict_equal(self, other)
        return NotImplemented

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._data.items()))
        return self._hash

    def __repr__(self) -> str:
        return f"FrozenMap({self._data!r})"

    def set(self, key: Any, value: Any) -> FrozenMap:
        """Return a copy with ``key`` bound to the frozen ``value``."""

        data = dict(self._data)
        data[key] = freeze(value)
        return FrozenMap._adopt(data)


EMPTY = FrozenMap()


def is_container(value: Any) -> bool:
    """Return whether ``value`` is a frozen nested container."""

    return isinstance(value, FrozenMap | tuple | frozenset)
def freeze(value: Any) -> Any:
    """Recursively convert plain nested data into snapshot containers."""

    if isinstance(value, FrozenMap):
        return value
    if isinstance(value, Mapping):
        return FrozenMap._adopt({key: freeze(item) for key, item in value.items()})
    if isinstance(value, list | tuple):
        return tuple(freeze(item) for item in value)
    if isinstance(value, set | frozenset):
        return frozenset(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Recursively convert snapshot containers back into plain nested data.

    Every container in the result is a fresh copy, so mutating it never
    reaches the snapshot.
    """

    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    if isinstance(value, set | frozenset):
        # Set members are hashable and stay frozen.
        return set(value)
    return value


def _tagged(value: Any) -> tuple[bool, Any]:
    return isinstance(value, bool), value


def strict_equal(left: Any, right: Any) -> bool:
    """Structural equality that tells booleans apart from numbers.

    Mappings compare key by key, sequences element by element and sets by
    membership; ``True`` never equals ``1`` at any depth.
    """

    if left is right:
        return True
    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        if len(left) != len(right):
            return False
        for key, item in left.items():
            if key not in right or not strict_equal(item, right[key]):
                return False
        return True
    if isinstance(left, list | tuple) or isinstance(right, list | tuple):
        if not (isinstance(left, list | tuple) and isinstance(right, list | tuple)):
            return False
        if len(left) != len(right):
            return False
        return all(strict_equal(a, b) for a, b in zip(left, right, strict=True))
    if isinstance(left, set | frozenset) or isinstance(right, set | frozenset):
        if not (isinstance(left, set | frozenset) and isinstance(right, set | frozenset)):
            return False
        return {_tagged(item) for item in left} == {_tagged(item) for item in right}
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    return bool(left == right)


def merge_deep(target: FrozenMap, source: Mapping[Any, Any]) -> FrozenMap:
    """Merge ``source`` into ``target`` and return the merged snapshot.

    Keys from ``source`` win. Where both sides hold a mapping the merge
    recurses; any other value, sequences included, replaces the existing one
    wholesale.
    """

    if not source:
        return target
    merged = dict(target)
    for key, value in source.items():
        existing = merged.get(key)
        if isinstance(existing, FrozenMap) and isinstance(value, Mapping):
            merged[key] = merge_deep(existing, value)
        else:
            merged[key] = freeze(value)
    return FrozenMap._adopt(merged)


__all__ = [
    "EMPTY",
    "FrozenMap",
    "freeze",
    "is_container",
    "merge_deep",
    "strict_equal",
    "thaw",
]
