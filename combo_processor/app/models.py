"""Shared type aliases and dataclasses for the replay processor."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Optional, Tuple

from ..core.replay_models import ReplayMetadata
from ..detectors.detection_result import DetectedSequence
from .run_state import RunState

ActionKind = Literal["none", "rename", "delete"]

LogCallback = Callable[[str], None]


class CancelToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def event(self) -> threading.Event:
        return self._event

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class FileAction:
    """What to do with a replay file after detection."""

    kind: ActionKind = "none"
    new_path: Optional[Path] = None

    @classmethod
    def none(cls) -> "FileAction":
        return cls("none")

    @classmethod
    def rename(cls, new_path: Path) -> "FileAction":
        return cls("rename", Path(new_path))

    @classmethod
    def delete(cls) -> "FileAction":
        return cls("delete")

    @property
    def is_none(self) -> bool:
        return self.kind == "none"


@dataclass(frozen=True)
class FileOutcome:
    index: int
    path: Path
    new_path: Optional[Path] = None
    deleted: bool = False
    sequences: Tuple[DetectedSequence, ...] = ()
    metadata: Optional[ReplayMetadata] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def final_path(self) -> Optional[Path]:
        if self.deleted:
            return None
        return self.new_path or self.path

    @property
    def failed(self) -> bool:
        return self.error is not None


ProgressCallback = Callable[[int, int, str, FileOutcome], None]


@dataclass(frozen=True)
class RunSummary:
    state: RunState
    files_total: int
    files_processed: int
    combos_found: int
    elapsed_seconds: float
    outcomes: Tuple[FileOutcome, ...]
    output_file: Optional[Path] = None
    output_error: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self.state == RunState.CANCELLED

    @property
    def files_renamed(self) -> int:
        return sum(1 for o in self.outcomes if o.new_path is not None)

    @property
    def files_deleted(self) -> int:
        return sum(1 for o in self.outcomes if o.deleted)

    @property
    def files_failed(self) -> int:
        return sum(1 for o in self.outcomes if o.failed)
