"""Shared pytest fixtures for release-prep tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from pydantic import ValidationError

from release_prep.settings import reload_settings


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Clear RELEASE_PREP_* and INPUT_* overrides and run each test in ``tmp_path``."""

    for name in list(os.environ):
        if name.upper().startswith(("RELEASE_PREP_", "INPUT_")):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    try:
        reload_settings()
    except ValidationError:
        pass
    yield
    try:
        reload_settings()
    except ValidationError:
        pass

    root_logger.handlers = handlers
    root_logger.setLevel(level)
    root_logger.__dict__.pop("_release_prep_configured", None)


@pytest.fixture
def write_file(tmp_path: Path):
    """Write ``content`` to ``relative_path`` under ``tmp_path`` and return the path."""

    def _write(relative_path: str, content: str) -> Path:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8", newline="")
        return path

    return _write
