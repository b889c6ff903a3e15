#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared result models for detector outputs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from ..core.replay_models import frame_to_seconds

SequenceGrade = Literal["combo", "conversion"]


@dataclass(frozen=True)
class Move:
    """One attack within a sequence; multi-hit attacks count once."""

    frame: int
    move_id: Optional[int]
    hit_count: int
    damage: float


@dataclass(frozen=True)
class DetectedSequence:
    """A punish run by ``attacker`` on ``defender``."""

    attacker: int
    defender: int
    start_frame: int
    end_frame: int
    start_percent: float
    end_percent: float
    moves: Tuple[Move, ...]
    did_kill: bool
    grade: SequenceGrade

    @property
    def move_count(self) -> int:
        return len(self.moves)

    @property
    def damage(self) -> float:
        return round(self.end_percent - self.start_percent, 2)

    @property
    def start_time(self) -> float:
        return frame_to_seconds(self.start_frame)

    @property
    def end_time(self) -> float:
        return frame_to_seconds(self.end_frame)

    @property
    def is_combo(self) -> bool:
        return self.grade == "combo"

    def overlaps(self, other: "DetectedSequence") -> bool:
        return self.start_frame <= other.end_frame and other.start_frame <= self.end_frame

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attacker": self.attacker,
            "defender": self.defender,
            "grade": self.grade,
            "startFrame": self.start_frame,
            "endFrame": self.end_frame,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "moveCount": self.move_count,
            "damage": self.damage,
            "didKill": self.did_kill,
        }

    def __str__(self) -> str:
        kill = ", kill" if self.did_kill else ""
        return (f"P{self.attacker + 1} {self.grade} on P{self.defender + 1}: "
                f"{self.move_count} moves, {self.damage:.1f}% "
                f"[{self.start_frame}-{self.end_frame}{kill}]")
