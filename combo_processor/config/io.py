"""Config I/O utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError, ValidationError
from .models import ProcessConfig

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def _read_payload(path: Path) -> Any:
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(raw)
    return json.loads(raw)


def load_process_config(config_path: Union[str, Path]) -> ProcessConfig:
    """Load a YAML or JSON file into a validated ProcessConfig."""
    path = Path(config_path)
    try:
        data = _read_payload(path)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file not found: {path}", file_path=str(path)) from exc
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as exc:
        logger.error("Error reading configuration %s: %s", path, exc)
        raise ConfigurationError(f"Failed to read configuration: {exc}", file_path=str(path)) from exc

    if not isinstance(data, dict):
        raise ValidationError("Configuration root must be a mapping", file_path=str(path))

    return process_config_from_dict(data, source=str(path))


def process_config_from_dict(data: Dict[str, Any], source: str = "") -> ProcessConfig:
    try:
        return ProcessConfig.model_validate(data)
    except PydanticValidationError as exc:
        errors = exc.errors()
        field_name = ".".join(str(part) for part in errors[0]["loc"]) if errors and errors[0].get("loc") else None
        logger.warning("Config validation failed%s: %s", f" ({source})" if source else "", exc)
        raise ValidationError(
            f"Invalid configuration: {exc}",
            field_name=field_name,
            file_path=source or None,
            details={"errors": [e.get("msg") for e in errors]},
        ) from exc


def save_process_config(config: ProcessConfig, config_path: Union[str, Path]) -> Path:
    """Write a ProcessConfig as YAML or JSON, chosen by file suffix."""
    path = Path(config_path)
    data = config.model_dump(mode="json")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() in _YAML_SUFFIXES:
            path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        else:
            path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as exc:
        logger.error("Error saving configuration: %s", exc)
        raise ConfigurationError(f"Failed to save configuration: {exc}", file_path=str(path)) from exc
    logger.info("Configuration saved to %s", path)
    return path
