from __future__ import annotations

from pathlib import Path

import pytest

from exiftree.config import RunConfig


@pytest.fixture
def target(tmp_path: Path) -> Path:
    root = tmp_path / "photos"
    root.mkdir()
    return root


@pytest.fixture
def config(target: Path) -> RunConfig:
    return RunConfig(target_dir=target)
