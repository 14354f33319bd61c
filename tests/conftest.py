from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure the src/ directory is importable when tests run via `uv run pytest`.
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from justmodel.config import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("JUSTMODEL_PATH_SEPARATOR", "JUSTMODEL_ERROR_POLICY"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
