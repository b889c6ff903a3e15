"""Result persistence and run reporting."""

from .result_writer import (
    DolphinQueueWriter,
    JsonResultWriter,
    ReplayRecord,
    ResultWriter,
    load_results,
)

__all__ = [
    "DolphinQueueWriter",
    "JsonResultWriter",
    "ReplayRecord",
    "ResultWriter",
    "load_results",
]
