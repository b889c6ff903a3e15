#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Combo Processor scanning package.

Primary entry point: iter_replay_files.
"""

from .replay_enumerator import REPLAY_EXTENSIONS, find_replay_files, iter_replay_files

__all__ = [
    "REPLAY_EXTENSIONS",
    "find_replay_files",
    "iter_replay_files",
]
