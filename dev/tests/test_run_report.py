from __future__ import annotations

from pathlib import Path

from combo_processor.app.models import FileOutcome, RunSummary
from combo_processor.app.run_state import RunState
from combo_processor.reporting.run_report import (
    describe_outcome,
    progress_percent,
    seconds_to_string,
    summary_message,
)

from replay_factory import make_sequence


def test_seconds_to_string():
    assert seconds_to_string(0) == "0 seconds"
    assert seconds_to_string(1) == "1 second"
    assert seconds_to_string(61) == "1 minute 1 second"
    assert seconds_to_string(3725) == "1 hour 2 minutes 5 seconds"
    assert seconds_to_string(7200) == "2 hours"


def test_describe_outcome_variants(replay_dir: Path, make_config):
    detect_cfg = make_config()
    rename_cfg = make_config(find_combos=False, rename_files=True, rename_template="{stem}_x")
    path = replay_dir / "game.slp"

    found = FileOutcome(index=1, path=path, sequences=(make_sequence(),))
    assert describe_outcome(found, detect_cfg) == "Found 1 combos in: game.slp"

    renamed = FileOutcome(index=1, path=path, new_path=replay_dir / "game_x.slp", sequences=(make_sequence(),))
    assert describe_outcome(renamed, detect_cfg) == "Found 1 combos in: game_x.slp"
    assert describe_outcome(renamed, rename_cfg) == "Renamed game.slp to game_x.slp"

    deleted = FileOutcome(index=1, path=path, deleted=True)
    assert describe_outcome(deleted, detect_cfg) == "Deleted game.slp"

    untouched = FileOutcome(index=1, path=path)
    assert describe_outcome(untouched, rename_cfg) is None

    failed = FileOutcome(index=1, path=path, error="bad header", error_code="DECODE_ERROR")
    assert describe_outcome(failed, detect_cfg) == "Failed to process game.slp: bad header"


def test_summary_message(make_config):
    config = make_config()
    summary = RunSummary(
        state=RunState.COMPLETED,
        files_total=4,
        files_processed=4,
        combos_found=7,
        elapsed_seconds=65.2,
        outcomes=(),
    )

    assert summary_message(summary, config) == (
        f"Processed 4 files in 1 minute 5 seconds and wrote 7 combos to: {config.output_file}"
    )


def test_progress_percent():
    assert progress_percent(1, 3) == 33
    assert progress_percent(3, 3) == 100
    assert progress_percent(0, 0) == 100
