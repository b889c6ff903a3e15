"""Run state machine (minimal FSM)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Set


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


TERMINAL_STATES = frozenset({RunState.COMPLETED, RunState.CANCELLED, RunState.FAILED})

_ALLOWED: Dict[RunState, Set[RunState]] = {
    RunState.IDLE: {RunState.RUNNING},
    RunState.RUNNING: {RunState.COMPLETED, RunState.CANCELLED, RunState.FAILED},
    RunState.COMPLETED: {RunState.RUNNING},
    RunState.CANCELLED: {RunState.RUNNING},
    RunState.FAILED: {RunState.RUNNING},
}


@dataclass
class RunStateMachine:
    state: RunState = RunState.IDLE

    def can_transition(self, target: RunState) -> bool:
        return target in _ALLOWED.get(self.state, set())

    def transition(self, target: RunState) -> bool:
        if self.can_transition(target):
            self.state = target
            return True
        return False

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES
