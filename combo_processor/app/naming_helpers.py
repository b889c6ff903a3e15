"""Replay filename templating helpers."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from ..config.models import check_rename_template
from ..core.replay_models import ReplayMetadata
from ..exceptions import ActionError

_ILLEGAL_CHARS_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

MAX_COLLISION_ATTEMPTS = 10_000


class _SafeDict(dict):
    def __missing__(self, key):
        return ""


def format_duration(frames: Optional[int]) -> str:
    """Render a frame count as ``3m05s``."""
    if frames is None or frames < 0:
        return ""
    seconds = int(frames // 60)
    return f"{seconds // 60}m{seconds % 60:02d}s"


def sanitize_filename(name: str) -> str:
    cleaned = _ILLEGAL_CHARS_RE.sub("_", name).strip()
    return cleaned.rstrip(". ")


def render_template(
    template: str,
    src: Path,
    *,
    sequences: Sequence = (),
    metadata: Optional[ReplayMetadata] = None,
    index: int = 0,
) -> str:
    """Render ``template`` into a filename for ``src``.

    Unknown tokens render empty. The original extension is appended when the
    rendered name does not already end with it.

    Raises:
        ActionError: the template is malformed or cannot be formatted.
    """
    ext_dot = src.suffix
    date: Optional[datetime] = metadata.date if metadata is not None else None

    data = _SafeDict(
        stem=src.stem,
        ext=ext_dot.lstrip("."),
        count=len(sequences),
        index=index,
        stage=metadata.stage if metadata is not None else "",
        players="-".join(p.display_name for p in metadata.players) if metadata is not None else "",
        duration=format_duration(metadata.duration_frames) if metadata is not None else "",
    )
    if date is not None:
        data.update(
            date=date.strftime("%Y%m%d"),
            time=date.strftime("%H%M%S"),
            year=f"{date.year:04d}",
            month=f"{date.month:02d}",
            day=f"{date.day:02d}",
            hour=f"{date.hour:02d}",
            minute=f"{date.minute:02d}",
            second=f"{date.second:02d}",
        )

    try:
        check_rename_template(template)
        formatted = template.format_map(data)
    except (ValueError, KeyError, IndexError, AttributeError) as exc:
        raise ActionError(f"Cannot render rename template {template!r}: {exc}",
                          replay_path=str(src), operation="rename") from exc

    rendered = sanitize_filename(formatted)
    if not rendered:
        rendered = src.name

    if ext_dot and not rendered.lower().endswith(ext_dot.lower()):
        rendered += ext_dot
    return rendered


def resolve_collision(target_file: Path) -> Path:
    """Return ``target_file`` or the first free ``name_N.ext`` next to it."""
    if not target_file.exists():
        return target_file

    stem = target_file.stem
    suffix = target_file.suffix
    for i in range(1, MAX_COLLISION_ATTEMPTS):
        candidate = target_file.with_name(f"{stem}_{i}{suffix}")
        if not candidate.exists():
            return candidate

    raise ActionError(f"Could not find free filename for {target_file.name}",
                      replay_path=str(target_file), operation="rename")
