"""Lightweight model configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache


class ErrorPolicy(StrEnum):
    """How update failures are surfaced to the caller."""

    RAISE = "raise"
    RETURN = "return"


@dataclass(frozen=True)
class ModelSettings:
    """Immutable configuration sourced from environment variables."""

    path_separator: str = "."
    error_policy: ErrorPolicy = ErrorPolicy.RAISE

    def __post_init__(self) -> None:
        if not self.path_separator:
            msg = "path_separator must be a non-empty string"
            raise ValueError(msg)

    @classmethod
    def from_env(cls) -> ModelSettings:
        return cls(
            path_separator=os.getenv("JUSTMODEL_PATH_SEPARATOR") or cls.path_separator,
            error_policy=ErrorPolicy(
                os.getenv("JUSTMODEL_ERROR_POLICY", cls.error_policy.value).strip().lower()
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> ModelSettings:
    """Return cached environment-derived settings."""

    return ModelSettings.from_env()


def reset_settings() -> None:
    """Clear the cached settings (useful for tests)."""

    get_settings.cache_clear()


__all__ = ["ErrorPolicy", "ModelSettings", "get_settings", "reset_settings"]
