"""Decide and apply the per-file action (rename, delete or nothing)."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from ..config.models import ProcessConfig
from ..exceptions import ActionError
from .models import FileAction, FileOutcome
from .naming_helpers import render_template, resolve_collision

logger = logging.getLogger(__name__)


def resolve(outcome: FileOutcome, config: ProcessConfig) -> FileAction:
    """Pick the action for a processed file.

    Delete wins over rename; files that failed to decode are left alone.
    """
    if outcome.failed:
        return FileAction.none()

    if config.delete_zero_combo_files and config.find_combos and not outcome.sequences:
        return FileAction.delete()

    if config.rename_files:
        name = render_template(
            config.rename_template,
            outcome.path,
            sequences=outcome.sequences,
            metadata=outcome.metadata,
            index=outcome.index,
        )
        target = outcome.path.with_name(name)
        if target == outcome.path:
            return FileAction.none()
        return FileAction.rename(resolve_collision(target))

    return FileAction.none()


def apply_action(path: Path, action: FileAction) -> Tuple[Optional[Path], bool]:
    """Perform ``action`` on ``path``; returns ``(new_path, deleted)``.

    Raises:
        ActionError: the rename target exists or the filesystem call failed.
    """
    if action.kind == "delete":
        try:
            path.unlink()
        except OSError as exc:
            raise ActionError(f"Failed to delete {path.name}: {exc}",
                              replay_path=str(path), operation="delete") from exc
        logger.debug("Deleted %s", path)
        return None, True

    if action.kind == "rename" and action.new_path is not None:
        target = action.new_path
        if target.exists():
            raise ActionError(f"Rename target already exists: {target.name}",
                              replay_path=str(path), operation="rename")
        try:
            os.rename(path, target)
        except OSError as exc:
            raise ActionError(f"Failed to rename {path.name}: {exc}",
                              replay_path=str(path), operation="rename") from exc
        logger.debug("Renamed %s -> %s", path, target)
        return target, False

    return None, False
