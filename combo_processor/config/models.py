"""Validated configuration models for a processing run."""

from __future__ import annotations

import string
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def check_rename_template(template: str) -> str:
    """Reject templates ``str.format_map`` cannot render from named tokens.

    Only bare names such as ``{stem}`` are allowed; positional fields and
    attribute or index access are refused.
    """
    try:
        fields = [name for _, name, _, _ in string.Formatter().parse(template) if name is not None]
    except ValueError as exc:
        raise ValueError(f"rename_template is malformed: {exc}") from exc
    for name in fields:
        if not name or name.isdigit():
            raise ValueError("rename_template must use named tokens such as {stem}, not positional fields")
        if "." in name or "[" in name:
            raise ValueError(f"rename_template token {{{name}}} must be a plain name")
    return template


class DetectionMode(str, Enum):
    ONLY_COMBOS = "only_combos"
    ONLY_CONVERSIONS = "only_conversions"


class _BaseConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class DetectionSettings(_BaseConfigModel):
    """Policy thresholds for grading punish runs.

    A run stays open while the defender is punished; once the defender is back
    in control, ``reset_frames`` frames may pass before the run closes.
    """

    reset_frames: int = Field(default=45, ge=0)
    conversion_min_moves: int = Field(default=1, ge=0)
    combo_min_moves: int = Field(default=3, ge=0)
    combo_min_damage: float = Field(default=30.0, ge=0.0)
    combo_requires_all: bool = True

    @model_validator(mode="after")
    def _combo_stricter_than_conversion(self) -> "DetectionSettings":
        if self.combo_min_moves < self.conversion_min_moves:
            raise ValueError("combo_min_moves must not be lower than conversion_min_moves")
        return self


class ProcessConfig(_BaseConfigModel):
    """Immutable description of one processing run."""

    files_path: Path
    include_subfolders: bool = False
    find_combos: bool = True
    find_combo_option: DetectionMode = DetectionMode.ONLY_COMBOS
    output_file: Optional[Path] = None
    delete_zero_combo_files: bool = False
    rename_files: bool = False
    rename_template: str = "{stem}"
    detection: DetectionSettings = Field(default_factory=DetectionSettings)

    @field_validator("rename_template")
    @classmethod
    def _valid_rename_template(cls, value: str) -> str:
        return check_rename_template(value)

    @model_validator(mode="after")
    def _check_run_options(self) -> "ProcessConfig":
        if not self.find_combos and not self.rename_files:
            raise ValueError("nothing to do: enable find_combos and/or rename_files")
        if self.find_combos and self.output_file is None:
            raise ValueError("output_file is required when find_combos is enabled")
        if self.rename_files and not self.rename_template.strip():
            raise ValueError("rename_template must not be empty when rename_files is enabled")
        return self
