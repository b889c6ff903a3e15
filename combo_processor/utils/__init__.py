"""Small shared helpers."""

from .async_utils import run_blocking

__all__ = ["run_blocking"]
