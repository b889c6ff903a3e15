"""App-level APIs.

The replay processor and the types it exchanges with callers (GUI, CLI or
async consumers).
"""

from .file_actions import apply_action, resolve
from .models import CancelToken, FileAction, FileOutcome, LogCallback, ProgressCallback, RunSummary
from .processor import ReplayProcessor
from .run_state import RunState, RunStateMachine

__all__ = [
    "CancelToken",
    "FileAction",
    "FileOutcome",
    "LogCallback",
    "ProgressCallback",
    "ReplayProcessor",
    "RunState",
    "RunStateMachine",
    "RunSummary",
    "apply_action",
    "resolve",
]
