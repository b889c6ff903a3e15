"""Persist and reload the sequences found by a processing run.

Two layouts are supported: a results document (one record per replay that
has sequences) and the Dolphin playback queue that plays every sequence back
to back.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Protocol, Tuple, Union

import jsonschema

from ..exceptions import ResultFormatError

logger = logging.getLogger(__name__)

SEQUENCE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["attacker", "defender", "grade", "startFrame", "endFrame",
                 "startTime", "endTime", "moveCount", "damage", "didKill"],
    "properties": {
        "attacker": {"type": "integer", "minimum": 0, "maximum": 3},
        "defender": {"type": "integer", "minimum": 0, "maximum": 3},
        "grade": {"enum": ["combo", "conversion"]},
        "startFrame": {"type": "integer"},
        "endFrame": {"type": "integer"},
        "startTime": {"type": "number"},
        "endTime": {"type": "number"},
        "moveCount": {"type": "integer", "minimum": 0},
        "damage": {"type": "number"},
        "didKill": {"type": "boolean"},
    },
}

RESULTS_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["path", "filename", "sequences"],
        "properties": {
            "path": {"type": "string"},
            "filename": {"type": "string"},
            "sequences": {"type": "array", "items": SEQUENCE_SCHEMA},
        },
    },
}


class ResultWriter(Protocol):
    def write(self, summary: Any, path: Path) -> Path:
        ...


@dataclass(frozen=True)
class ReplayRecord:
    path: str
    filename: str
    sequences: Tuple[Dict[str, Any], ...]

    @property
    def combo_count(self) -> int:
        return len(self.sequences)

    @property
    def time_ranges(self) -> List[Tuple[float, float]]:
        return [(float(s["startTime"]), float(s["endTime"])) for s in self.sequences]


def _write_json_atomic(payload: Any, dst: Path) -> Path:
    dst.parent.mkdir(parents=True, exist_ok=True)
    tmp = dst.with_name(dst.name + ".part")
    try:
        with open(tmp, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(str(tmp), str(dst))
    finally:
        if tmp.exists():
            try:
                tmp.unlink()
            except OSError as exc:
                logger.debug("Failed to remove temp file: %s", exc)
    return dst


def _replay_records(summary: Any) -> List[Dict[str, Any]]:
    records: List[Dict[str, Any]] = []
    for outcome in summary.outcomes:
        if not outcome.sequences:
            continue
        final_path = outcome.final_path or outcome.path
        records.append({
            "path": str(final_path),
            "filename": Path(final_path).name,
            "sequences": [seq.to_dict() for seq in outcome.sequences],
        })
    return records


class JsonResultWriter:
    """Writes the results document as a JSON array."""

    def write(self, summary: Any, path: Path) -> Path:
        return _write_json_atomic(_replay_records(summary), Path(path))


class DolphinQueueWriter:
    """Writes a Dolphin playback queue (``mode: queue``)."""

    def write(self, summary: Any, path: Path) -> Path:
        queue = []
        for record in _replay_records(summary):
            for seq in record["sequences"]:
                queue.append({
                    "path": record["path"],
                    "startFrame": seq["startFrame"],
                    "endFrame": seq["endFrame"],
                })
        document = {"mode": "queue", "replay": "", "isRealTimeMode": False, "queue": queue}
        return _write_json_atomic(document, Path(path))


def load_results(path: Union[str, Path]) -> List[ReplayRecord]:
    """Read a results document written by JsonResultWriter.

    Raises:
        ResultFormatError: the file is not JSON or does not match the layout.
    """
    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ResultFormatError(f"Results file is not valid JSON: {exc}", file_path=str(file_path)) from exc

    try:
        jsonschema.validate(instance=data, schema=RESULTS_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise ResultFormatError(f"Results file does not match the expected layout: {exc.message}",
                                file_path=str(file_path)) from exc

    return [
        ReplayRecord(path=item["path"], filename=item["filename"], sequences=tuple(item["sequences"]))
        for item in data
    ]
