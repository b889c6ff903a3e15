from __future__ import annotations

import asyncio
from pathlib import Path

from combo_processor.app import ReplayProcessor, RunState
from combo_processor.app.progress_streams import process_stream

from replay_factory import decode_fixture, with_combos, write_replay


async def _consume(async_iter):
    items = []
    async for event in async_iter:
        items.append(event)
    return items


def test_process_stream_end_to_end(replay_dir: Path, make_config) -> None:
    write_replay(replay_dir / "a.slp", with_combos(1))
    write_replay(replay_dir / "b.slp", with_combos(2))
    processor = ReplayProcessor(decoder=decode_fixture)

    events = asyncio.run(_consume(process_stream(processor, make_config())))

    progress = [e for e in events if e.kind == "progress"]
    assert [(e.current, e.total, e.filename) for e in progress] == [(1, 2, "a.slp"), (2, 2, "b.slp")]
    assert any(e.kind == "log" and e.message == "Found 2 combos in: b.slp" for e in events)

    assert events[-1].kind == "result"
    summary = events[-1].result
    assert summary.combos_found == 3
    assert summary.state == RunState.COMPLETED
