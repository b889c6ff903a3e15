from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional

from ..config.models import ProcessConfig
from ..utils.async_utils import run_blocking
from .models import FileOutcome, RunSummary
from .processor import ReplayProcessor


@dataclass(frozen=True)
class ProgressEvent:
    kind: str
    current: int = 0
    total: int = 0
    filename: Optional[str] = None
    message: Optional[str] = None
    result: Optional[Any] = None


def _queue_progress(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue, current: int, total: int,
                    filename: str, outcome: FileOutcome) -> None:
    event = ProgressEvent(kind="progress", current=int(current), total=int(total), filename=filename, result=outcome)
    loop.call_soon_threadsafe(queue.put_nowait, event)


def _queue_log(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue, message: str) -> None:
    loop.call_soon_threadsafe(queue.put_nowait, ProgressEvent(kind="log", message=str(message)))


async def process_stream(
    processor: ReplayProcessor,
    config: ProcessConfig,
) -> AsyncIterator[ProgressEvent]:
    """Run ``processor.process`` in an executor and yield its events in order.

    The last event has ``kind="result"`` and carries the RunSummary. Errors
    raised by the run propagate after the queued events are drained.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def progress_cb(c: int, t: int, filename: str, outcome: FileOutcome) -> None:
        _queue_progress(loop, queue, c, t, filename, outcome)

    def log_cb(msg: str) -> None:
        _queue_log(loop, queue, msg)

    task = asyncio.create_task(run_blocking(processor.process, config, progress_cb, log_cb))

    while True:
        if task.done() and queue.empty():
            break
        try:
            event = await asyncio.wait_for(queue.get(), timeout=0.05)
            yield event
        except asyncio.TimeoutError:
            continue

    result: RunSummary = task.result()
    yield ProgressEvent(kind="result", current=result.files_processed, total=result.files_total, result=result)
