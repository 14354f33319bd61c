"""Change detection between current and original values."""

from __future__ import annotations

from typing import Any

from .snapshot import strict_equal


def values_differ(current: Any, original: Any) -> bool:
    """Return whether a current value differs from its original counterpart.

    Frozen containers compare structurally; a container never equals a
    non-container. Scalars compare by value, and a boolean never equals a
    number.
    """

    return not strict_equal(current, original)


__all__ = ["values_differ"]
