#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Combo Processor - base detector defining the interface shared by replay detectors."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..config.models import DetectionMode, DetectionSettings
from ..core.replay_models import GameReplay
from .detection_result import DetectedSequence

logger = logging.getLogger(__name__)


class BaseDetector(ABC):
    """Base class for detectors that scan a decoded replay for sequences."""

    def __init__(self, settings: Optional[DetectionSettings] = None):
        self.settings = settings or DetectionSettings()
        self.last_result: Optional[List[DetectedSequence]] = None

    @abstractmethod
    def detect(self, replay: GameReplay, mode: DetectionMode) -> List[DetectedSequence]:
        """Return the sequences in ``replay`` that qualify under ``mode``."""

    def get_last_result(self) -> Optional[List[DetectedSequence]]:
        return self.last_result
