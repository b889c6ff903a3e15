from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure repo root on path
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from combo_processor.config.models import ProcessConfig  # noqa: E402


def pytest_configure() -> None:
    """Ensure pytest base temp directory exists for CI runs."""

    base_temp = ROOT / "temp" / "pytest"
    base_temp.mkdir(parents=True, exist_ok=True)


@pytest.fixture
def replay_dir(tmp_path: Path) -> Path:
    path = tmp_path / "replays"
    path.mkdir()
    return path


@pytest.fixture
def make_config(tmp_path: Path, replay_dir: Path):
    """Build a ProcessConfig rooted at ``replay_dir`` with overrides."""

    def _make(**overrides) -> ProcessConfig:
        values = {
            "files_path": replay_dir,
            "output_file": tmp_path / "out" / "combos.json",
        }
        values.update(overrides)
        return ProcessConfig(**values)

    return _make
