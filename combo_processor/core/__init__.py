#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Combo Processor - Core Package

Decoded replay types and the py-slippi decoder adapter.
"""

from .replay_models import (
    FRAMES_PER_SECOND,
    GameReplay,
    PlayerFrame,
    PlayerInfo,
    ReplayMetadata,
    frame_to_seconds,
)
from .slippi_decoder import decode_replay

__all__ = [
    "FRAMES_PER_SECOND",
    "GameReplay",
    "PlayerFrame",
    "PlayerInfo",
    "ReplayMetadata",
    "decode_replay",
    "frame_to_seconds",
]
