from __future__ import annotations

import json
from pathlib import Path

import pydantic
import pytest
import yaml

from combo_processor.config import (
    DetectionMode,
    DetectionSettings,
    ProcessConfig,
    load_process_config,
    process_config_from_dict,
    save_process_config,
)
from combo_processor.exceptions import ConfigurationError, ValidationError


def test_defaults(tmp_path: Path) -> None:
    config = ProcessConfig(files_path=tmp_path, output_file=tmp_path / "out.json")

    assert config.find_combos is True
    assert config.find_combo_option == DetectionMode.ONLY_COMBOS
    assert config.include_subfolders is False
    assert config.delete_zero_combo_files is False
    assert config.detection == DetectionSettings()
    assert config.detection.reset_frames == 45
    assert config.detection.combo_min_moves == 3
    assert config.detection.combo_min_damage == 30.0


def test_config_is_frozen(tmp_path: Path) -> None:
    config = ProcessConfig(files_path=tmp_path, output_file=tmp_path / "out.json")
    with pytest.raises(pydantic.ValidationError):
        config.rename_files = True


@pytest.mark.parametrize(
    "payload",
    [
        {"find_combos": True},
        {"find_combos": False, "rename_files": False},
        {"find_combos": False, "rename_files": True, "rename_template": "  "},
        {"output_file": "out.json", "unknown_option": 1},
        {"output_file": "out.json", "detection": {"combo_min_moves": 1, "conversion_min_moves": 2}},
        {"output_file": "out.json", "find_combo_option": "everything"},
        {"output_file": "out.json", "rename_template": "{stem"},
        {"output_file": "out.json", "rename_template": "{0}_x"},
        {"output_file": "out.json", "rename_template": "{}_x"},
        {"output_file": "out.json", "rename_template": "{stem.upper}"},
        {"output_file": "out.json", "rename_template": "{players[0]}"},
    ],
)
def test_invalid_payloads_rejected(tmp_path: Path, payload) -> None:
    data = {"files_path": str(tmp_path), **payload}
    with pytest.raises(ValidationError) as excinfo:
        process_config_from_dict(data)
    assert excinfo.value.error_code == "VALIDATION_ERROR"


def test_load_yaml_config(tmp_path: Path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text(
        yaml.safe_dump({
            "files_path": str(tmp_path),
            "output_file": str(tmp_path / "combos.json"),
            "find_combo_option": "only_conversions",
            "detection": {"reset_frames": 30},
        }),
        encoding="utf-8",
    )

    config = load_process_config(path)

    assert config.find_combo_option == DetectionMode.ONLY_CONVERSIONS
    assert config.detection.reset_frames == 30
    assert config.files_path == tmp_path


def test_save_and_reload_json(tmp_path: Path) -> None:
    config = ProcessConfig(
        files_path=tmp_path,
        output_file=tmp_path / "combos.json",
        rename_files=True,
        rename_template="{stem}_{count}",
    )

    path = save_process_config(config, tmp_path / "cfg" / "run.json")

    assert json.loads(path.read_text(encoding="utf-8"))["rename_template"] == "{stem}_{count}"
    assert load_process_config(path) == config


def test_save_and_reload_yaml(tmp_path: Path) -> None:
    config = ProcessConfig(files_path=tmp_path, output_file=tmp_path / "combos.json")
    path = save_process_config(config, tmp_path / "run.yml")
    assert load_process_config(path) == config


def test_missing_file_raises_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        load_process_config(tmp_path / "missing.yaml")
    assert excinfo.value.details["file_path"] == str(tmp_path / "missing.yaml")


def test_non_mapping_root_rejected(tmp_path: Path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_process_config(path)


def test_broken_yaml_raises_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text("files_path: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_process_config(path)


def test_rename_template_accepts_named_tokens_and_escapes(tmp_path: Path) -> None:
    config = ProcessConfig(
        files_path=tmp_path,
        output_file=tmp_path / "out.json",
        rename_files=True,
        rename_template="{{{date}}}_{stem}_combo{count:02d}",
    )
    assert config.rename_template == "{{{date}}}_{stem}_combo{count:02d}"
