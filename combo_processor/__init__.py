"""Combo Processor - batch combo detection for Slippi replay folders."""

from .version import __version__

__all__ = ["__version__"]
