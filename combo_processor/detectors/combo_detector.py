#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Combo Processor - combo/conversion detector

Walks each attacker/defender pairing frame by frame and collects punish runs:
a run opens when the defender becomes punished or takes damage, collects the
attacker's hits as moves, and closes once the defender has been back in
control for more than ``reset_frames`` frames, loses a stock, or the replay
ends. Closed runs are graded as conversions or combos by DetectionSettings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..config.models import DetectionMode, DetectionSettings
from ..core.replay_models import GameReplay, PlayerFrame
from ..exceptions import DecodeError
from .action_states import is_command_grabbed, is_dead, is_grabbed, is_in_control, is_punished
from .base_detector import BaseDetector
from .detection_result import DetectedSequence, Move, SequenceGrade

logger = logging.getLogger(__name__)

FrameTable = Dict[int, PlayerFrame]


@dataclass
class _MoveBuilder:
    frame: int
    move_id: Optional[int]
    hit_count: int = 0
    damage: float = 0.0

    def build(self) -> Move:
        return Move(frame=self.frame, move_id=self.move_id, hit_count=self.hit_count,
                    damage=round(self.damage, 2))


@dataclass
class _OpenRun:
    start_frame: int
    start_percent: float
    moves: List[_MoveBuilder] = field(default_factory=list)
    reset_counter: int = 0
    last_hit_state: Optional[int] = None
    grabbed: bool = False


@dataclass(frozen=True)
class _ClosedRun:
    attacker: int
    defender: int
    start_frame: int
    end_frame: int
    start_percent: float
    end_percent: float
    moves: Tuple[Move, ...]
    grabbed: bool
    did_kill: bool

    @property
    def damage(self) -> float:
        return self.end_percent - self.start_percent


def _index_frames(replay: GameReplay) -> Dict[int, FrameTable]:
    """Group frames by port, rejecting frames that miss required fields.

    A repeated frame index for the same port replaces the earlier entry
    (rollback frames).
    """
    tables: Dict[int, FrameTable] = {}
    for player_frame in replay.frames:
        missing = [name for name in ("state", "percent", "stocks")
                   if getattr(player_frame, name) is None]
        if missing:
            raise DecodeError(
                f"Frame {player_frame.frame} port {player_frame.port} is missing {', '.join(missing)}",
                replay_path=replay.metadata.source_path,
            )
        tables.setdefault(player_frame.port, {})[player_frame.frame] = player_frame
    return tables


class ComboDetector(BaseDetector):
    """Detects punish runs and grades them as combos or conversions."""

    def detect(self, replay: GameReplay, mode: DetectionMode) -> List[DetectedSequence]:
        tables = _index_frames(replay)
        ports = sorted(tables)

        graded: List[DetectedSequence] = []
        for attacker in ports:
            candidates: List[DetectedSequence] = []
            for defender in self._opponents(replay, attacker, ports):
                for run in self._scan_pair(attacker, defender, tables[attacker], tables[defender]):
                    grade = self._grade(run)
                    if grade is not None:
                        candidates.append(self._to_sequence(run, grade))
            graded.extend(_without_overlaps(candidates))

        if mode == DetectionMode.ONLY_COMBOS:
            selected = [seq for seq in graded if seq.is_combo]
        else:
            selected = graded

        selected.sort(key=lambda seq: (seq.start_frame, seq.attacker, seq.defender))
        self.last_result = selected
        logger.debug("%s: %d sequences (%s)", replay.metadata.source_path, len(selected), mode.value)
        return selected

    @staticmethod
    def _opponents(replay: GameReplay, attacker: int, ports: Iterable[int]) -> List[int]:
        own = replay.metadata.player(attacker)
        own_team = own.team if own is not None else None
        result = []
        for port in ports:
            if port == attacker:
                continue
            other = replay.metadata.player(port)
            if own_team is not None and other is not None and other.team == own_team:
                continue
            result.append(port)
        return result

    def _scan_pair(self, attacker: int, defender: int,
                   attacker_frames: FrameTable, defender_frames: FrameTable) -> List[_ClosedRun]:
        reset_frames = self.settings.reset_frames
        runs: List[_ClosedRun] = []
        run: Optional[_OpenRun] = None
        prev_opp: Optional[PlayerFrame] = None
        last_frame: Optional[int] = None

        def close(end_frame: int, end_percent: float, did_kill: bool) -> None:
            runs.append(_ClosedRun(
                attacker=attacker,
                defender=defender,
                start_frame=run.start_frame,
                end_frame=end_frame,
                start_percent=run.start_percent,
                end_percent=end_percent,
                moves=tuple(m.build() for m in run.moves),
                grabbed=run.grabbed,
                did_kill=did_kill,
            ))

        for frame_index in sorted(attacker_frames.keys() & defender_frames.keys()):
            att = attacker_frames[frame_index]
            opp = defender_frames[frame_index]
            # damage dealt by a third player does not belong to this pairing
            attributed = opp.last_hit_by is None or opp.last_hit_by == attacker
            damage_taken = opp.percent - prev_opp.percent if prev_opp is not None and attributed else 0.0
            lost_stock = prev_opp is not None and opp.stocks < prev_opp.stocks
            punished = attributed and is_punished(opp.state)

            if run is None and (punished or damage_taken > 0):
                run = _OpenRun(start_frame=frame_index,
                               start_percent=prev_opp.percent if prev_opp is not None else opp.percent)

            if run is not None:
                if run.last_hit_state is not None and att.state != run.last_hit_state:
                    run.last_hit_state = None

                if damage_taken > 0:
                    if run.last_hit_state is None or not run.moves:
                        run.moves.append(_MoveBuilder(frame=frame_index, move_id=att.last_attack_landed))
                    current = run.moves[-1]
                    current.hit_count += 1
                    current.damage += damage_taken
                    run.last_hit_state = att.state

                if is_grabbed(opp.state) or is_command_grabbed(opp.state):
                    run.grabbed = True

                if punished or damage_taken > 0:
                    run.reset_counter = 0
                elif run.reset_counter > 0 or is_in_control(opp.state):
                    run.reset_counter += 1

                if lost_stock or is_dead(opp.state):
                    close(frame_index, prev_opp.percent if prev_opp is not None else opp.percent, True)
                    run = None
                elif run.reset_counter > reset_frames:
                    close(frame_index, opp.percent, False)
                    run = None

            prev_opp = opp
            last_frame = frame_index

        if run is not None and last_frame is not None:
            close(last_frame, prev_opp.percent, False)

        return runs

    def _grade(self, run: _ClosedRun) -> Optional[SequenceGrade]:
        settings = self.settings
        if not run.moves and not run.grabbed:
            return None
        if len(run.moves) < settings.conversion_min_moves:
            return None

        moves_ok = len(run.moves) >= settings.combo_min_moves
        damage_ok = run.damage >= settings.combo_min_damage
        if settings.combo_requires_all:
            is_combo = moves_ok and damage_ok
        else:
            is_combo = moves_ok or damage_ok
        return "combo" if is_combo else "conversion"

    @staticmethod
    def _to_sequence(run: _ClosedRun, grade: SequenceGrade) -> DetectedSequence:
        return DetectedSequence(
            attacker=run.attacker,
            defender=run.defender,
            start_frame=run.start_frame,
            end_frame=run.end_frame,
            start_percent=round(run.start_percent, 2),
            end_percent=round(run.end_percent, 2),
            moves=run.moves,
            did_kill=run.did_kill,
            grade=grade,
        )


def _without_overlaps(sequences: List[DetectedSequence]) -> List[DetectedSequence]:
    """Keep the earliest of any overlapping sequences by one attacker (free-for-all games)."""
    kept: List[DetectedSequence] = []
    for seq in sorted(sequences, key=lambda s: (s.start_frame, s.defender)):
        if kept and kept[-1].overlaps(seq):
            continue
        kept.append(seq)
    return kept


def detect(replay: GameReplay, mode: DetectionMode,
           settings: Optional[DetectionSettings] = None) -> List[DetectedSequence]:
    """Detect sequences in ``replay`` using a fresh ComboDetector."""
    return ComboDetector(settings).detect(replay, mode)
