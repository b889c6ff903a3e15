#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Combo Processor - replay file enumerator

Walks a replay folder with ``os.scandir`` and yields ``.slp`` files in a
stable order: entries of each directory are visited sorted by name, and
subdirectories are descended depth-first as they are met.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

from ..exceptions import NotFoundError

logger = logging.getLogger(__name__)

REPLAY_EXTENSIONS: Tuple[str, ...] = (".slp",)


def _check_root(root: Union[str, Path]) -> Path:
    path = Path(root)
    if not path.exists():
        raise NotFoundError(f"Replay folder does not exist: {path}", path=str(path))
    if not path.is_dir():
        raise NotFoundError(f"Replay folder is not a directory: {path}", path=str(path))
    return path


def _walk(directory: Path, recurse: bool, extensions: Tuple[str, ...]) -> Iterator[Path]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        logger.warning("Skipping unreadable folder %s: %s", directory, exc)
        return

    for entry in entries:
        if entry.is_symlink():
            continue
        try:
            if entry.is_dir(follow_symlinks=False):
                if recurse:
                    yield from _walk(Path(entry.path), recurse, extensions)
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
        except OSError as exc:
            logger.debug("Cannot stat %s: %s", entry.path, exc)
            continue
        if entry.name.lower().endswith(extensions):
            yield Path(entry.path)


def iter_replay_files(root: Union[str, Path], recurse: bool = False,
                      extensions: Iterable[str] = REPLAY_EXTENSIONS) -> Iterator[Path]:
    """Yield replay files under ``root``.

    The root is validated immediately; the walk itself is lazy. Calling again
    restarts the walk from the beginning.

    Raises:
        NotFoundError: ``root`` is missing or not a directory.
    """
    path = _check_root(root)
    normalized = tuple(ext.lower() for ext in extensions)
    return _walk(path, recurse, normalized)


def find_replay_files(root: Union[str, Path], recurse: bool = False) -> List[Path]:
    """Snapshot of ``iter_replay_files`` as a list."""
    return list(iter_replay_files(root, recurse))
