"""Batch orchestrator: enumerate, decode, detect, act, report."""

from __future__ import annotations

import dataclasses
import logging
import threading
import time
from pathlib import Path
from typing import Callable, List, Optional

from ..config.models import ProcessConfig
from ..core.replay_models import GameReplay
from ..core.slippi_decoder import decode_replay
from ..detectors.combo_detector import ComboDetector
from ..exceptions import ActionError, DecodeError, ProcessorBusyError
from ..logging_config import LoggingTimer
from ..reporting.result_writer import JsonResultWriter, ResultWriter
from ..reporting.run_report import describe_outcome, summary_message
from ..scanning.replay_enumerator import iter_replay_files
from .file_actions import apply_action, resolve
from .models import CancelToken, FileOutcome, LogCallback, ProgressCallback, RunSummary
from .run_state import RunState, RunStateMachine

logger = logging.getLogger(__name__)

ReplayDecoder = Callable[[Path], GameReplay]


def _log(log_cb: Optional[LogCallback], msg: str) -> None:
    if log_cb is not None:
        log_cb(msg)


class ReplayProcessor:
    """Runs one batch at a time over a folder of replays.

    ``process`` blocks until the run ends; ``stop`` may be called from any
    thread and takes effect before the next file.
    """

    def __init__(self, decoder: Optional[ReplayDecoder] = None,
                 writer: Optional[ResultWriter] = None):
        self._decoder: ReplayDecoder = decoder or decode_replay
        self._writer: ResultWriter = writer or JsonResultWriter()
        self._lock = threading.Lock()
        self._machine = RunStateMachine()
        self._token: Optional[CancelToken] = None

    @property
    def state(self) -> RunState:
        with self._lock:
            return self._machine.state

    @property
    def is_running(self) -> bool:
        return self.state == RunState.RUNNING

    def stop(self) -> None:
        with self._lock:
            token = self._token
        if token is not None:
            logger.info("Stop requested")
            token.cancel()

    def _finish(self, state: RunState) -> None:
        with self._lock:
            self._machine.transition(state)
            self._token = None

    def process(
        self,
        config: ProcessConfig,
        on_progress: Optional[ProgressCallback] = None,
        on_log: Optional[LogCallback] = None,
    ) -> RunSummary:
        """Process every replay under ``config.files_path``.

        A ``stop()`` request is honoured before each file and once more after
        the last one, so a stop during the final progress callback still ends
        the run as cancelled.

        Raises:
            ProcessorBusyError: another run is active on this processor.
            NotFoundError: the replay folder is missing; state is unchanged.
        """
        with self._lock:
            if self._machine.state == RunState.RUNNING:
                raise ProcessorBusyError()
            # root check only; the walk itself runs outside the lock
            replay_files = iter_replay_files(config.files_path, config.include_subfolders)
            self._machine.transition(RunState.RUNNING)
            token = CancelToken()
            self._token = token

        started = time.perf_counter()
        detector = ComboDetector(config.detection)
        outcomes: List[FileOutcome] = []
        final_state = RunState.COMPLETED

        try:
            files = list(replay_files)
            total = len(files)
            logger.info("Processing %d replays in %s", total, config.files_path)

            for index, path in enumerate(files, start=1):
                if token.is_cancelled():
                    final_state = RunState.CANCELLED
                    _log(on_log, "Cancellation requested. Stopping")
                    logger.info("Run cancelled after %d of %d files", len(outcomes), total)
                    break

                outcome = self._process_file(index, path, config, detector)
                outcomes.append(outcome)

                message = describe_outcome(outcome, config)
                if message:
                    _log(on_log, message)
                if on_progress is not None:
                    on_progress(index, total, path.name, outcome)

            if final_state == RunState.COMPLETED and token.is_cancelled():
                final_state = RunState.CANCELLED
                logger.info("Run cancelled after the last file")

            summary = RunSummary(
                state=final_state,
                files_total=total,
                files_processed=len(outcomes),
                combos_found=sum(len(o.sequences) for o in outcomes),
                elapsed_seconds=0.0,
                outcomes=tuple(outcomes),
            )
            if config.find_combos and config.output_file is not None:
                summary = self._write_results(summary, Path(config.output_file))
            summary = dataclasses.replace(summary, elapsed_seconds=time.perf_counter() - started)
        except Exception:
            logger.exception("Run failed after %d files", len(outcomes))
            self._finish(RunState.FAILED)
            raise

        self._finish(final_state)
        message = summary_message(summary, config)
        logger.info(message)
        _log(on_log, message)
        return summary

    def _process_file(self, index: int, path: Path, config: ProcessConfig,
                      detector: ComboDetector) -> FileOutcome:
        try:
            with LoggingTimer("decode"):
                replay = self._decoder(path)
            sequences = ()
            if config.find_combos:
                with LoggingTimer("detect"):
                    sequences = tuple(detector.detect(replay, config.find_combo_option))
        except DecodeError as exc:
            logger.warning("Skipping %s: %s", path.name, exc)
            return FileOutcome(index=index, path=path, error=str(exc), error_code=exc.error_code)

        outcome = FileOutcome(index=index, path=path, sequences=sequences, metadata=replay.metadata)
        logger.debug("%s: %d sequences", path.name, len(sequences))

        try:
            action = resolve(outcome, config)
            new_path, deleted = apply_action(path, action)
        except ActionError as exc:
            logger.warning("File action failed for %s: %s", path.name, exc)
            return dataclasses.replace(outcome, error=str(exc), error_code=exc.error_code)

        return dataclasses.replace(outcome, new_path=new_path, deleted=deleted)

    def _write_results(self, summary: RunSummary, output_file: Path) -> RunSummary:
        try:
            written = self._writer.write(summary, output_file)
        except (OSError, ValueError) as exc:
            logger.error("Failed to write results to %s: %s", output_file, exc)
            return dataclasses.replace(summary, output_error=str(exc))
        logger.info("Wrote %d combos to %s", summary.combos_found, written)
        return dataclasses.replace(summary, output_file=written)
