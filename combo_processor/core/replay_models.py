"""Decoded replay types shared by the decoder adapter and the detectors."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

FRAMES_PER_SECOND = 60


@dataclass(frozen=True)
class PlayerFrame:
    """Post-frame state of one player.

    Fields are optional because older or truncated replays can omit them;
    the detectors reject frames missing required data.
    """

    frame: int
    port: int
    state: Optional[int]
    percent: Optional[float]
    stocks: Optional[int]
    last_attack_landed: Optional[int] = None
    last_hit_by: Optional[int] = None


@dataclass(frozen=True)
class PlayerInfo:
    port: int
    character: str = "Unknown"
    tag: Optional[str] = None
    netplay_name: Optional[str] = None
    team: Optional[int] = None
    is_cpu: bool = False

    @property
    def display_name(self) -> str:
        return self.netplay_name or self.tag or self.character


@dataclass(frozen=True)
class ReplayMetadata:
    source_path: str
    stage: str = "Unknown"
    players: Tuple[PlayerInfo, ...] = ()
    date: Optional[datetime] = None
    duration_frames: Optional[int] = None

    def player(self, port: int) -> Optional[PlayerInfo]:
        for info in self.players:
            if info.port == port:
                return info
        return None


@dataclass(frozen=True)
class GameReplay:
    metadata: ReplayMetadata
    frames: Tuple[PlayerFrame, ...]

    @property
    def ports(self) -> Tuple[int, ...]:
        return tuple(sorted({f.port for f in self.frames}))


def frame_to_seconds(frame: int) -> float:
    return round(frame / FRAMES_PER_SECOND, 3)
