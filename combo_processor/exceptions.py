#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Combo Processor - Consolidated Exception Classes

All project-specific errors live here. Per-file failures (DecodeError,
ActionError) are captured on the file's outcome by the processor; only
pre-flight errors propagate to the caller of a run.
"""

from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """Base class for all project-specific errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code or "ERROR"
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Converts the exception to a dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': str(self),
            'details': self.details,
            'timestamp': self.timestamp.isoformat()
        }


# =====================================================================================================
# Configuration errors
# =====================================================================================================

class ConfigurationError(BaseError):
    """Base class for configuration errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        config_details = details or {}
        if file_path:
            config_details['file_path'] = str(file_path)
        super().__init__(message, error_code or "CONFIG_ERROR", config_details)


class ValidationError(ConfigurationError):
    """Raised when a configuration payload fails validation."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        validation_details = details or {}
        if field_name:
            validation_details['field_name'] = field_name
        super().__init__(message, "VALIDATION_ERROR", file_path, validation_details)


# =====================================================================================================
# Run-level errors
# =====================================================================================================

class NotFoundError(BaseError):
    """Raised when the replay root is missing or is not a directory."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        path_details = details or {}
        if path:
            path_details['path'] = str(path)
        super().__init__(message, "NOT_FOUND", path_details)


class ProcessorBusyError(BaseError):
    """Raised when a run is started while another run is still active."""

    def __init__(self, message: str = "A processing run is already active",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "PROCESSOR_BUSY", details)


# =====================================================================================================
# Per-file processing errors
# =====================================================================================================

class ProcessingError(BaseError):
    """Base class for errors while processing a single replay."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 replay_path: Optional[str] = None,
                 phase: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        proc_details = details or {}
        if replay_path:
            proc_details['replay_path'] = str(replay_path)
        if phase:
            proc_details['phase'] = phase
        super().__init__(message, error_code or "PROCESSING_ERROR", proc_details)


class DecodeError(ProcessingError):
    """Raised when a replay cannot be parsed or its event stream is malformed."""

    def __init__(self, message: str, replay_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DECODE_ERROR", replay_path, "decode", details)


class ActionError(ProcessingError):
    """Raised when renaming or deleting a replay fails."""

    def __init__(self, message: str, replay_path: Optional[str] = None,
                 operation: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        action_details = details or {}
        if operation:
            action_details['operation'] = operation
        super().__init__(message, "ACTION_ERROR", replay_path, "file_action", action_details)


# =====================================================================================================
# Data errors
# =====================================================================================================

class DataError(BaseError):
    """Base class for data-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "DATA_ERROR", details)


class ResultFormatError(DataError):
    """Raised when a results file does not match the expected document layout."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        file_details = details or {}
        if file_path:
            file_details['file_path'] = str(file_path)
        super().__init__(message, "RESULT_FORMAT_ERROR", file_details)
