"""Combo Processor - configuration package.

Run configuration is a frozen pydantic model; unknown fields are rejected.
"""

from .models import DetectionMode, DetectionSettings, ProcessConfig
from .io import load_process_config, process_config_from_dict, save_process_config

__all__ = [
    'DetectionMode',
    'DetectionSettings',
    'ProcessConfig',
    'load_process_config',
    'process_config_from_dict',
    'save_process_config',
]
