"""Human-readable run messages and progress helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..app.models import FileOutcome, RunSummary
    from ..config.models import ProcessConfig


def seconds_to_string(seconds: float) -> str:
    """Format a duration as ``1 hour 2 minutes 3 seconds`` style text."""
    total = int(round(max(seconds, 0.0)))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)

    def unit(value: int, name: str) -> str:
        return f"{value} {name}" + ("" if value == 1 else "s")

    parts = []
    if hours:
        parts.append(unit(hours, "hour"))
    if minutes:
        parts.append(unit(minutes, "minute"))
    if secs or not parts:
        parts.append(unit(secs, "second"))
    return " ".join(parts)


def describe_outcome(outcome: FileOutcome, config: ProcessConfig) -> Optional[str]:
    """One log line for a processed file, or None when there is nothing to say."""
    filename = outcome.filename
    if outcome.failed:
        return f"Failed to process {filename}: {outcome.error}"
    if config.find_combos:
        if outcome.deleted:
            return f"Deleted {filename}"
        shown = outcome.new_path.name if outcome.new_path is not None else filename
        return f"Found {len(outcome.sequences)} combos in: {shown}"
    if config.rename_files and outcome.new_path is not None:
        return f"Renamed {filename} to {outcome.new_path.name}"
    return None


def summary_message(summary: RunSummary, config: ProcessConfig) -> str:
    message = f"Processed {summary.files_processed} files in {seconds_to_string(summary.elapsed_seconds)}"
    if config.find_combos:
        message += f" and wrote {summary.combos_found} combos to: {config.output_file}"
    if summary.cancelled:
        message += " (cancelled)"
    return message


def progress_percent(index: int, total: int) -> int:
    if total <= 0:
        return 100
    return round(index / total * 100)
