#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Combo Processor detectors package."""

from .base_detector import BaseDetector
from .combo_detector import ComboDetector, detect
from .detection_result import DetectedSequence, Move, SequenceGrade

__all__ = [
    "BaseDetector",
    "ComboDetector",
    "DetectedSequence",
    "Move",
    "SequenceGrade",
    "detect",
]
